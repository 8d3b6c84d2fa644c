"""Lexical path-safety helpers for extraction.

All comparisons operate on path segments, never on raw string prefixes, so
``a/`` never claims ``ab/x``. Nothing here touches the filesystem; symlinks
already present under a destination are not resolved.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from .exceptions import PathTraversalError


def archive_path(name: str) -> PurePosixPath:
    """Return ``name`` as a posix path (archive member names always use ``/``)."""
    return PurePosixPath(name.replace("\\", "/"))


def is_within(child: Path, root: Path) -> bool:
    """Return True when ``child`` is ``root`` or lexically below it."""
    c = Path(os.path.normpath(child))
    r = Path(os.path.normpath(root))
    return c == r or c.is_relative_to(r)


def join_within(root: Path, segment: str, *, what: str = "path") -> Path:
    """Join ``segment`` onto ``root``, refusing anything that escapes ``root``.

    Raises:
        PathTraversalError: if ``segment`` is absolute, contains ``..``, or the
            joined result does not remain lexically under ``root``.
    """
    rel = archive_path(segment)
    if rel.is_absolute() or ".." in rel.parts or "\x00" in segment:
        raise PathTraversalError(
            f"invalid {what} {segment!r}: potential malicious use of relative path",
            path=segment,
            root=str(root),
        )

    candidate = Path(root).joinpath(*rel.parts)
    if not is_within(candidate, Path(root)):
        raise PathTraversalError(
            f"invalid {what} {segment!r}: resolves outside {root}",
            path=str(candidate),
            root=str(root),
        )
    return candidate


def _segments(name: str) -> list[str]:
    # Unlike PurePosixPath, keep "." segments so "./" never collapses to the root.
    return [seg for seg in name.replace("\\", "/").split("/") if seg]


def is_descendant(prefix: str, member: str) -> bool:
    """True when ``member`` lives strictly below the directory ``prefix``."""
    prefix_parts = _segments(prefix)
    member_parts = _segments(member)
    if not prefix_parts:
        return False
    return len(member_parts) > len(prefix_parts) and member_parts[: len(prefix_parts)] == prefix_parts


__all__ = ["archive_path", "is_within", "join_within", "is_descendant"]
