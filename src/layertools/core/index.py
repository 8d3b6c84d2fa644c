"""Loading of the layer and classpath index members.

Both indexes are YAML documents stored inside the jar. ``load_index`` reads a
member fully as UTF-8 and hands it to a :class:`StructuredTextParser`; the
result is a generic tree (str / list / dict with insertion order kept) that
the planner and classpath lister interpret.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Protocol, Tuple

import yaml

from .archive import MEMBER_READ_ERRORS, MemberSource
from .exceptions import IndexFormatError, MemberNotFoundError

logger = logging.getLogger(__name__)


class StructuredTextParser(Protocol):
    """Parses text into a list of generic-tree documents."""

    def parse(self, text: str) -> List[Any]:
        ...


class YamlParser:
    """:class:`StructuredTextParser` backed by PyYAML's safe loader."""

    def parse(self, text: str) -> List[Any]:
        return list(yaml.safe_load_all(text))


@dataclass(frozen=True)
class LayerEntry:
    """One layer of the index: its name and declared member entries."""

    name: str
    files: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LayerIndex:
    """Ordered layers as declared by the layer index."""

    layers: Tuple[LayerEntry, ...] = field(default_factory=tuple)

    def names(self) -> List[str]:
        return [layer.name for layer in self.layers]

    def __iter__(self):
        return iter(self.layers)

    def __len__(self) -> int:
        return len(self.layers)


@dataclass(frozen=True)
class ClasspathIndex:
    """Ordered classpath member names."""

    entries: Tuple[str, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def read_member_text(archive: MemberSource, member_name: str) -> str:
    """Read an archive member fully and decode it as UTF-8."""
    try:
        with archive.open_member(member_name) as stream:
            data = stream.read()
    except MemberNotFoundError:
        raise
    except MEMBER_READ_ERRORS as exc:
        raise IndexFormatError(
            f"Failed to read index {member_name}: {exc}", index=member_name
        ) from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise IndexFormatError(
            f"Failed to read index {member_name}: not valid UTF-8 ({exc.reason} at byte {exc.start})",
            index=member_name,
        ) from exc


def load_index(
    archive: MemberSource,
    member_name: str,
    *,
    parser: StructuredTextParser | None = None,
) -> Any:
    """Load and parse index member ``member_name`` into a generic tree.

    Raises:
        MemberNotFoundError: the member does not exist.
        IndexFormatError: decoding or parsing failed, or the text holds zero or
            more than one document.
    """
    try:
        text = read_member_text(archive, member_name)
    except MemberNotFoundError as exc:
        raise MemberNotFoundError(
            f"Failed to open index {member_name}: member not found",
            context={"member": member_name},
        ) from exc

    parser = parser or YamlParser()
    try:
        documents = parser.parse(text)
    except yaml.YAMLError as exc:
        raise IndexFormatError(
            f"Failed to parse index {member_name}: {exc}", index=member_name
        ) from exc

    if len(documents) != 1:
        raise IndexFormatError(
            f"Invalid index {member_name}: expected a single document, found {len(documents)}",
            index=member_name,
            context={"documents": len(documents)},
        )

    logger.debug("Loaded index %s", member_name)
    return documents[0]


__all__ = [
    "StructuredTextParser",
    "YamlParser",
    "LayerEntry",
    "LayerIndex",
    "ClasspathIndex",
    "read_member_text",
    "load_index",
]
