"""Scoped acquisition and release of closeable resources."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, TypeVar

_log = logging.getLogger(__name__)


class Closeable(Protocol):
    def close(self) -> None:
        ...


T = TypeVar("T", bound=Closeable)


def release(resource: Optional[Closeable]) -> None:
    """Close `resource`, ignoring close failures so they never mask the original error."""
    if resource is None:
        return
    try:
        resource.close()
    except OSError as exc:
        _log.debug("Ignoring error while closing %r: %s", resource, exc)


@contextmanager
def scoped(resource: T) -> Iterator[T]:
    """Yield `resource` and release it on every exit path."""
    try:
        yield resource
    finally:
        release(resource)
