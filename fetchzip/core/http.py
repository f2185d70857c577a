"""HTTP capability: perform a GET and expose the status and body stream."""

from __future__ import annotations

import http.client
import urllib.error
import urllib.request
from typing import BinaryIO, Optional, Protocol

from ..common.constants import DEFAULT_HTTP_TIMEOUT
from ..common.errors import TransportError


class HttpResponse:
    """Status code plus a readable body that must be closed."""

    def __init__(self, status: int, body: Optional[BinaryIO] = None):
        self.status = status
        self._body = body

    def read(self, size: int = -1) -> bytes:
        if self._body is None:
            return b""
        return self._body.read(size)

    def close(self) -> None:
        if self._body is not None:
            self._body.close()


class HttpClient(Protocol):
    def get(self, url: str) -> HttpResponse:
        ...


class UrllibHttpClient:
    """`HttpClient` built on `urllib.request`; redirects are followed by urllib."""

    def __init__(self, timeout: float = DEFAULT_HTTP_TIMEOUT):
        self.timeout = timeout

    def get(self, url: str) -> HttpResponse:
        try:
            response = urllib.request.urlopen(url, timeout=self.timeout)  # noqa: S310
        except urllib.error.HTTPError as exc:
            # Error statuses still carry a body; the caller decides what to do with it.
            return HttpResponse(exc.code, exc)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        return HttpResponse(response.status, response)
