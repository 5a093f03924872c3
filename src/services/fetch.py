from __future__ import annotations

from pathlib import Path

import httpx

"""Raw document fetch for ingestion.

``source`` is either an http(s) URL or a local file path. Any transport
problem (connection error, timeout, non-2xx status, unreadable file) is
raised as IngestionTransportError; no retry is attempted here.
"""

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "IngestionTransportError",
    "fetch_document",
    "is_url",
]

DEFAULT_TIMEOUT_SECONDS = 10.0


class IngestionTransportError(Exception):
    """Raised when the raw document cannot be fetched."""


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_url(url: str, timeout: float, client: httpx.Client | None) -> str:
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        response = client.get(url)
        response.raise_for_status()
        return response.text
    except httpx.HTTPStatusError as e:
        raise IngestionTransportError(f"http_{e.response.status_code} {url}") from e
    except httpx.TimeoutException as e:
        raise IngestionTransportError(f"timeout {url}") from e
    except httpx.HTTPError as e:
        raise IngestionTransportError(f"{type(e).__name__} {url}: {e}") from e
    finally:
        if owns_client:
            client.close()


def fetch_document(
    source: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    client: httpx.Client | None = None,
) -> str:
    """Return the full text body of ``source``.

    Args:
        source: http(s) URL or local path
        timeout: Request timeout in seconds (URL sources only)
        client: Optional preconfigured httpx client (tests inject MockTransport)

    Raises:
        IngestionTransportError: On any fetch failure
    """
    if is_url(source):
        return _fetch_url(source, timeout, client)
    path = Path(source)
    try:
        # utf-8-sig: Excel 由来の BOM 付き CSV を許容
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionTransportError(f"cannot read {path}: {e}") from e
