from __future__ import annotations

import logging
import threading
import urllib.error
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from conftest import FakeHttpClient, build_zip
from fetchzip.common.config import staging_path
from fetchzip.common.errors import RemoteFetchError, StorageError, TransportError
from fetchzip.core import http as fetch_http
from fetchzip.core.fetcher import fetch, new_identifier
from fetchzip.core.filesystem import MemoryFilesystem
from fetchzip.core.http import UrllibHttpClient

ARCHIVE = build_zip([("notes.txt", b"hello")])


@pytest.fixture
def staging_fs():
    fs = MemoryFilesystem()
    fs.makedirs("/staging")
    return fs


def _staged_files(fs):
    return [entry.path for entry in fs.walk("/staging")][1:]


def test_new_identifier_is_unique_hex():
    first, second = new_identifier(), new_identifier()
    assert first != second
    assert len(first) == 32
    int(first, 16)


def test_fetch_writes_body_to_staging_file(staging_fs):
    client = FakeHttpClient(200, ARCHIVE)

    identifier = fetch(
        "https://example.com/test.zip",
        fs=staging_fs,
        http=client,
        id_provider=lambda: "abc123",
        staging_dir="/staging",
        chunk_size=7,
    )

    assert identifier == "abc123"
    assert client.requested == ["https://example.com/test.zip"]
    assert staging_fs.read_bytes("/staging/abc123.zip") == ARCHIVE
    assert client.body.was_closed


def test_fetch_non_200_fails_without_staging_file(staging_fs):
    client = FakeHttpClient(404, b"not found")
    calls = []

    with pytest.raises(RemoteFetchError) as excinfo:
        fetch(
            "https://example.com/missing.zip",
            fs=staging_fs,
            http=client,
            id_provider=lambda: calls.append(1) or "unused",
            staging_dir="/staging",
        )

    assert excinfo.value.status == 404
    assert excinfo.value.url == "https://example.com/missing.zip"
    assert _staged_files(staging_fs) == []
    assert calls == []
    assert client.body.was_closed


@pytest.mark.parametrize("status", [201, 204, 302, 500])
def test_fetch_requires_exactly_200(staging_fs, status):
    with pytest.raises(RemoteFetchError):
        fetch("https://example.com/a.zip", fs=staging_fs, http=FakeHttpClient(status), staging_dir="/staging")
    assert _staged_files(staging_fs) == []


def test_fetch_body_read_failure_is_transport_error(staging_fs):
    client = FakeHttpClient(200, ARCHIVE, fail_after=10)

    with pytest.raises(TransportError):
        fetch(
            "https://example.com/test.zip",
            fs=staging_fs,
            http=client,
            id_provider=lambda: "partial",
            staging_dir="/staging",
        )

    # No rollback: the partial download stays, but every handle is released.
    assert staging_fs.read_bytes("/staging/partial.zip") == ARCHIVE[:10]
    assert client.body.was_closed


def test_fetch_staging_create_failure_is_storage_error():
    fs = MemoryFilesystem()
    client = FakeHttpClient(200, ARCHIVE)

    with pytest.raises(StorageError) as excinfo:
        fetch("https://example.com/test.zip", fs=fs, http=client, id_provider=lambda: "x", staging_dir="/nowhere")

    assert excinfo.value.path == "/nowhere/x.zip"
    assert client.body.was_closed


def test_fetch_propagates_transport_error(staging_fs):
    class BrokenClient:
        def get(self, url):
            raise TransportError(f"GET {url} failed: connection refused")

    with pytest.raises(TransportError, match="connection refused"):
        fetch("https://example.com/test.zip", fs=staging_fs, http=BrokenClient(), staging_dir="/staging")


def test_fetch_logs_to_injected_logger(staging_fs, caplog):
    logger = logging.getLogger("test-fetch")
    caplog.set_level(logging.INFO, logger="test-fetch")

    fetch(
        "https://example.com/test.zip",
        fs=staging_fs,
        http=FakeHttpClient(200, ARCHIVE),
        id_provider=lambda: "logged",
        staging_dir="/staging",
        logger=logger,
    )

    assert "Downloaded https://example.com/test.zip as /staging/logged.zip" in caplog.text


def test_urllib_client_maps_url_errors(monkeypatch):
    def refuse(*_args, **_kwargs):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(fetch_http.urllib.request, "urlopen", refuse)

    with pytest.raises(TransportError):
        UrllibHttpClient().get("http://example.invalid/a.zip")


def test_urllib_client_rejects_malformed_url():
    with pytest.raises(TransportError):
        UrllibHttpClient().get("not a url")


class _ArchiveHandler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802
        if self.path == "/test.zip":
            self.send_response(200)
            self.send_header("Content-Length", str(len(ARCHIVE)))
            self.end_headers()
            self.wfile.write(ARCHIVE)
        else:
            self.send_error(404)

    def log_message(self, *_args):
        pass


@pytest.fixture
def archive_server():
    server = HTTPServer(("127.0.0.1", 0), _ArchiveHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


def test_fetch_over_http_to_disk(archive_server, tmp_path):
    identifier = fetch(f"{archive_server}/test.zip", http=UrllibHttpClient(timeout=5), staging_dir=str(tmp_path))

    staged = tmp_path / f"{identifier}.zip"
    assert staged.read_bytes() == ARCHIVE
    assert staging_path(identifier, str(tmp_path)) == str(staged)


def test_fetch_over_http_404(archive_server, tmp_path):
    with pytest.raises(RemoteFetchError) as excinfo:
        fetch(f"{archive_server}/missing.zip", http=UrllibHttpClient(timeout=5), staging_dir=str(tmp_path))

    assert excinfo.value.status == 404
    assert list(tmp_path.iterdir()) == []
