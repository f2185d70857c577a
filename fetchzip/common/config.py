"""Configuration helpers for fetchzip.

All settings come from the environment:

* ``FETCHZIP_STAGING_DIR`` - where downloads are staged (default ``/tmp``)
* ``FETCHZIP_HTTP_TIMEOUT`` - socket timeout in seconds (default 30)
* ``FETCHZIP_CHUNK_SIZE`` - copy buffer size in bytes (default 1 MiB)
* ``FETCHZIP_LOG_LEVEL`` - logging level name (default ``INFO``)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_STAGING_DIR,
    STAGING_SUFFIX,
)


def env_int(key: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    value = (environ if environ is not None else os.environ).get(key)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def staging_path(identifier: str, staging_dir: Optional[str] = None) -> str:
    """Return the staging file path a fetch identifier refers to."""
    return os.path.join(staging_dir or DEFAULT_STAGING_DIR, f"{identifier}{STAGING_SUFFIX}")


@dataclass
class FetchzipSettings:
    """Typed settings sourced from the environment."""

    staging_dir: str = DEFAULT_STAGING_DIR
    http_timeout: int = DEFAULT_HTTP_TIMEOUT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FetchzipSettings":
        env = environ if environ is not None else os.environ
        return cls(
            staging_dir=env.get("FETCHZIP_STAGING_DIR") or DEFAULT_STAGING_DIR,
            http_timeout=env_int("FETCHZIP_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, env),
            chunk_size=env_int("FETCHZIP_CHUNK_SIZE", DEFAULT_CHUNK_SIZE, env),
            log_level=(env.get("FETCHZIP_LOG_LEVEL") or "INFO").upper(),
        )

    def staging_path(self, identifier: str) -> str:
        return staging_path(identifier, self.staging_dir)
