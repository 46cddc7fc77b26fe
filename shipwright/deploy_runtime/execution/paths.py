"""Search path aggregation and path comparison.

The aggregator is pure: the inherited search path is passed in explicitly
rather than read from the process environment.
"""

from __future__ import annotations

import os
import posixpath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def aggregate_search_path(candidates: Iterable[str | None]) -> list[str]:
    """Drop absent and empty entries, keeping the given order.

    Duplicates are kept as given; earlier entries shadow later ones at
    lookup time.
    """
    return [c for c in candidates if c]


def prepend_to_search_path(prefix: Iterable[str], inherited: str | None, separator: str = os.pathsep) -> str:
    """Join *prefix* in front of the inherited search path."""
    parts = [p for p in prefix if p]
    if inherited:
        parts.append(inherited)
    return separator.join(parts)


def parent_directory(path: str | None) -> str | None:
    """Directory containing *path*, or ``None`` for an absent path."""
    if not path:
        return None
    return os.path.dirname(path) or None


def _normalize(path: str) -> str:
    unc = path.startswith("\\\\")
    normalized = posixpath.normpath(path.replace("\\", "/"))
    # normpath keeps exactly two leading slashes; only a UNC share is entitled to them.
    if normalized.startswith("//"):
        normalized = ("//" if unc else "/") + normalized.lstrip("/")
    if normalized not in ("/", "//"):
        normalized = normalized.rstrip("/")
    return normalized.casefold()


def paths_equal(left: str | None, right: str | None) -> bool:
    """Case-insensitive path equality, ignoring separator style and trailing slashes."""
    if not left or not right:
        return False
    return _normalize(left) == _normalize(right)
