"""Command line entrypoint for the business leads catalog."""

from .__main__ import main

__all__ = ["main"]
