"""Delimited-text handling: tokenizer, header locator and CSV export."""

from .header import HeaderNotFoundError, locate_header
from .tokenizer import RawRow, tokenize
from .writer import ExportArtifact, build_export_artifact, export_leads, write_export

__all__ = [
    "ExportArtifact",
    "HeaderNotFoundError",
    "RawRow",
    "build_export_artifact",
    "export_leads",
    "locate_header",
    "tokenize",
    "write_export",
]
