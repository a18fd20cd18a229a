"""Filesystem probe — does a glob pattern match anything under a directory?"""

from __future__ import annotations

from pathlib import Path


def any_match(directory: str, pattern: str) -> bool:
    """Return ``True`` if *pattern* (relative, ``**`` allowed) matches any path."""
    root = Path(directory)
    if not root.is_dir():
        return False
    for _ in root.glob(pattern):
        return True
    return False
