"""Recursive filename search."""

from __future__ import annotations

import re
from typing import List, Optional

from ..common.errors import PatternError, WalkError
from .filesystem import Filesystem, OsFilesystem


def find_files(root: str, pattern: str, *, fs: Optional[Filesystem] = None) -> List[str]:
    """
    Return every path under `root` whose base name matches `pattern`.

    The expression is searched for anywhere in the name (``re.search``), and
    results keep the walk order: parents before children, siblings sorted.
    Nodes that cannot be read are skipped.

    Raises:
        PatternError: If `pattern` does not compile
        WalkError: If `root` itself cannot be walked
    """
    try:
        regex = re.compile(pattern)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc

    fs = fs or OsFilesystem()
    files: List[str] = []
    try:
        for entry in fs.walk(root):
            if entry.error is None and regex.search(entry.name):
                files.append(entry.path)
    except OSError as exc:
        raise WalkError(root, str(exc)) from exc
    return files
