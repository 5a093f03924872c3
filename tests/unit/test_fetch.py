from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from src.services.fetch import IngestionTransportError, fetch_document, is_url


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_is_url():
    assert is_url("https://example.com/Companies.csv")
    assert is_url("http://example.com/a.csv")
    assert not is_url("./data/Companies.csv")


def test_fetch_url_success():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/Companies.csv"
        return httpx.Response(200, text="Name,Description\n")

    with _client(handler) as client:
        assert fetch_document("https://example.com/Companies.csv", client=client) == "Name,Description\n"


@pytest.mark.parametrize("status", [404, 500, 503])
def test_fetch_url_non_2xx_is_transport_error(status: int):
    with _client(lambda request: httpx.Response(status)) as client:
        with pytest.raises(IngestionTransportError, match=f"http_{status}"):
            fetch_document("https://example.com/Companies.csv", client=client)


def test_fetch_url_connect_error_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(IngestionTransportError, match="ConnectError"):
            fetch_document("https://example.com/Companies.csv", client=client)


def test_fetch_url_timeout_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with _client(handler) as client:
        with pytest.raises(IngestionTransportError, match="timeout"):
            fetch_document("https://example.com/Companies.csv", client=client)


def test_fetch_local_file(tmp_path: Path):
    path = tmp_path / "Companies.csv"
    path.write_text("Name,Description\n", encoding="utf-8")
    assert fetch_document(str(path)) == "Name,Description\n"


def test_fetch_local_file_strips_bom(tmp_path: Path):
    path = tmp_path / "Companies.csv"
    path.write_bytes("\ufeffName,Description\n".encode("utf-8"))
    assert fetch_document(str(path)).startswith("Name")


def test_fetch_missing_local_file(tmp_path: Path):
    with pytest.raises(IngestionTransportError, match="cannot read"):
        fetch_document(str(tmp_path / "missing.csv"))


def test_fetch_undecodable_local_file(tmp_path: Path):
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"Name,Caf\xe9\n")
    with pytest.raises(IngestionTransportError):
        fetch_document(str(path))
