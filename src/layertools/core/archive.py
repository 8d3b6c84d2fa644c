"""Archive access for layered jars.

Extraction and index loading depend only on the :class:`MemberSource`
protocol. :class:`ZipMemberSource` is the production implementation backed by
:mod:`zipfile`; tests substitute in-memory doubles.
"""

from __future__ import annotations

import logging
import re
import zipfile
import zlib
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import IO, Iterator, List, Protocol

from .exceptions import LayertoolsError, MemberNotFoundError, PathTraversalError
from .paths import archive_path

logger = logging.getLogger(__name__)

# Errors zipfile raises while streaming a damaged member.
MEMBER_READ_ERRORS = (OSError, EOFError, zipfile.BadZipFile, zlib.error)

_DRIVE = re.compile(r"^[A-Za-z]:$")


class MemberSource(Protocol):
    """Random-access view over an archive's flat member namespace."""

    def list_member_names(self) -> List[str]:
        """Member names in archive enumeration order."""
        ...

    def open_member(self, name: str) -> IO[bytes]:
        """Open member ``name`` for streaming read; raise MemberNotFoundError if absent."""
        ...

    def enclosed_name(self, name: str) -> PurePosixPath:
        """Traversal-free relative path for member ``name``."""
        ...


def enclosed_name(name: str) -> PurePosixPath:
    """Return ``name`` as a relative path guaranteed free of traversal components.

    Raises:
        PathTraversalError: for absolute or drive-letter names, ``..``
            components, or NUL bytes.
    """
    if "\x00" in name:
        raise PathTraversalError(f"failed to determine enclosed name of file: {name!r}", path=name)
    rel = archive_path(name)
    if rel.is_absolute() or ".." in rel.parts or (rel.parts and _DRIVE.match(rel.parts[0])):
        raise PathTraversalError(f"failed to determine enclosed name of file: {name}", path=name)
    if not rel.parts:
        raise PathTraversalError(f"failed to determine enclosed name of file: {name!r}", path=name)
    return rel


class ZipMemberSource:
    """:class:`MemberSource` over an open :class:`zipfile.ZipFile`."""

    def __init__(self, zf: zipfile.ZipFile) -> None:
        self._zip = zf
        self._names: List[str] | None = None

    def list_member_names(self) -> List[str]:
        if self._names is None:
            self._names = self._zip.namelist()
        return list(self._names)

    def open_member(self, name: str) -> IO[bytes]:
        try:
            info = self._zip.getinfo(name)
        except KeyError as exc:
            raise MemberNotFoundError(
                f"archive member not found: {name}", context={"member": name}
            ) from exc
        return self._zip.open(info, "r")

    def enclosed_name(self, name: str) -> PurePosixPath:
        return enclosed_name(name)


@contextmanager
def open_jar(path: Path) -> Iterator[ZipMemberSource]:
    """Open the jar at ``path`` read-only and yield a member source."""
    jar = Path(path)
    try:
        zf = zipfile.ZipFile(jar, "r")
    except zipfile.BadZipFile as exc:
        raise LayertoolsError(
            f"Failed to open jar archive: {jar}: {exc}", context={"path": str(jar)}
        ) from exc
    except OSError as exc:
        raise LayertoolsError(
            f"Failed to open jar: {jar}: {exc.strerror or exc}", context={"path": str(jar)}
        ) from exc

    with zf:
        logger.debug("Opened %s (%d members)", jar, len(zf.infolist()))
        yield ZipMemberSource(zf)


__all__ = ["MEMBER_READ_ERRORS", "MemberSource", "ZipMemberSource", "enclosed_name", "open_jar"]
