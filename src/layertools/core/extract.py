"""Layer extraction onto disk.

Layers are processed sequentially in plan order and extraction stops at the
first error. Layers already written stay on disk; there is no rollback.

Each declared entry is either a directory marker (ends with ``/``) or the
exact name of an archive member. Archives carry no real directory hierarchy,
so a directory marker is expanded by matching the path segments of every
member name against the marker.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import IO, Iterable, List, Optional, Sequence

from .archive import MEMBER_READ_ERRORS, MemberSource
from .exceptions import ExtractionIOError, MemberNotFoundError, UnknownLayerFileError
from .index import LayerEntry, LayerIndex
from .paths import is_descendant, join_within

logger = logging.getLogger(__name__)

DIRECTORY_MARKER = "/"


@dataclass
class LayerReport:
    """What was written for one layer."""

    name: str
    root: Path
    files: List[Path] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": str(self.root),
            "files": len(self.files),
        }


def is_directory_entry(entry: str) -> bool:
    return entry.endswith(DIRECTORY_MARKER)


def expand_directory(prefix: str, member_names: Iterable[str]) -> List[str]:
    """File members living below directory marker ``prefix``, in listing order."""
    return [
        name
        for name in member_names
        if not is_directory_entry(name) and is_descendant(prefix, name)
    ]


def ensure_directory(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExtractionIOError(
            f"failed to create directory {path}: {exc.strerror or exc}",
            path=str(path),
            operation="mkdir",
        ) from exc
    return path


def _output_path(layer_root: Path, relative: PurePosixPath) -> Path:
    return layer_root.joinpath(*relative.parts)


def _open_member(archive: MemberSource, name: str, output_path: Path) -> IO[bytes]:
    try:
        return archive.open_member(name)
    except MemberNotFoundError:
        raise
    except MEMBER_READ_ERRORS as exc:
        raise ExtractionIOError(
            f"failed to read {name} for {output_path}: {exc}",
            path=str(output_path),
            operation="read",
        ) from exc


def _write_member(archive: MemberSource, name: str, output_path: Path) -> None:
    ensure_directory(output_path.parent)
    with _open_member(archive, name, output_path) as src:
        _copy_stream(src, output_path)


def _copy_stream(src: IO[bytes], output_path: Path) -> None:
    created = False
    try:
        with open(output_path, "wb") as dst:
            created = True
            shutil.copyfileobj(src, dst)
    except MEMBER_READ_ERRORS as exc:
        # Do not leave a truncated file behind.
        if created:
            output_path.unlink(missing_ok=True)
        raise ExtractionIOError(
            f"failed to write {output_path}: {getattr(exc, 'strerror', None) or exc}",
            path=str(output_path),
            operation="write",
        ) from exc


def extract_layer(
    archive: MemberSource,
    destination: Path,
    layer: LayerEntry,
    *,
    member_names: Optional[Sequence[str]] = None,
) -> LayerReport:
    """Extract one layer into ``destination/<layer name>/``.

    Raises:
        PathTraversalError: the layer name, a directory entry, or a member name
            would escape its root.
        UnknownLayerFileError: a declared file entry is not in the archive.
        ExtractionIOError: a directory or file could not be written, or a
            damaged member could not be read.
    """
    destination = Path(destination)
    layer_root = join_within(destination, layer.name, what="layer name")
    # Reject unsafe directory entries before anything is written for this layer.
    directories = {
        entry: join_within(layer_root, entry, what="directory name")
        for entry in layer.files
        if is_directory_entry(entry)
    }
    ensure_directory(layer_root)
    report = LayerReport(name=layer.name, root=layer_root)

    names = list(member_names) if member_names is not None else archive.list_member_names()

    for entry in layer.files:
        if is_directory_entry(entry):
            ensure_directory(directories[entry])

            for member in expand_directory(entry, names):
                output_path = _output_path(layer_root, archive.enclosed_name(member))
                _write_member(archive, member, output_path)
                report.files.append(output_path)
                logger.debug("%s: %s -> %s", layer.name, member, output_path)
            continue

        output_path = _output_path(layer_root, archive.enclosed_name(entry))
        try:
            src = _open_member(archive, entry, output_path)
        except MemberNotFoundError as exc:
            raise UnknownLayerFileError(layer.name, entry) from exc

        with src:
            ensure_directory(output_path.parent)
            _copy_stream(src, output_path)
        report.files.append(output_path)
        logger.debug("%s: %s -> %s", layer.name, entry, output_path)

    logger.info("Extracted layer %s (%d files) to %s", layer.name, len(report.files), layer_root)
    return report


def extract_layers(
    archive: MemberSource,
    destination: Path,
    plan: LayerIndex,
) -> List[LayerReport]:
    """Create ``destination`` and extract every planned layer into it, in order."""
    destination = ensure_directory(Path(destination))
    reports: List[LayerReport] = []
    for layer in plan:
        reports.append(extract_layer(archive, destination, layer))
    return reports


__all__ = [
    "LayerReport",
    "DIRECTORY_MARKER",
    "is_directory_entry",
    "expand_directory",
    "ensure_directory",
    "extract_layer",
    "extract_layers",
]
