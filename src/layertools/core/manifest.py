"""Jar manifest discovery of the layer and classpath index members."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import IO, Iterable, Optional

from .archive import MemberSource
from .exceptions import ManifestError, MemberNotFoundError

logger = logging.getLogger(__name__)

MANIFEST_PATH = "META-INF/MANIFEST.MF"
PROP_LAYERS_INDEX = "Spring-Boot-Layers-Index"
PROP_CLASSPATH_INDEX = "Spring-Boot-Classpath-Index"


def _property_value(line: str) -> Optional[str]:
    _, sep, rest = line.partition(":")
    if not sep:
        return None
    return rest.lstrip()


@dataclass(frozen=True)
class JarManifest:
    """Index member names declared by a layered jar's manifest."""

    layers_index: str
    classpath_index: str

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        layers_property: str = PROP_LAYERS_INDEX,
        classpath_property: str = PROP_CLASSPATH_INDEX,
    ) -> "JarManifest":
        """Scan ``lines`` for the two index properties.

        The first property prefix matching a line wins for that line. Scanning
        stops as soon as both values are known.

        Raises:
            ManifestError: naming the property that was never found.
        """
        layers_index: Optional[str] = None
        classpath_index: Optional[str] = None

        for raw in lines:
            line = raw.rstrip("\r\n")
            if line.startswith(layers_property):
                value = _property_value(line)
                if value is not None:
                    layers_index = value
            elif line.startswith(classpath_property):
                value = _property_value(line)
                if value is not None:
                    classpath_index = value

            if layers_index is not None and classpath_index is not None:
                break

        if layers_index is None:
            raise ManifestError(
                f"MANIFEST.MF missing '{layers_property}'; layered Jar?",
                context={"property": layers_property},
            )
        if classpath_index is None:
            raise ManifestError(
                f"MANIFEST.MF missing '{classpath_property}'; layered Jar?",
                context={"property": classpath_property},
            )

        return cls(layers_index=layers_index, classpath_index=classpath_index)

    @classmethod
    def from_text(cls, text: str, **kwargs: str) -> "JarManifest":
        return cls.from_lines(text.splitlines(), **kwargs)

    @classmethod
    def from_reader(cls, stream: IO[bytes], **kwargs: str) -> "JarManifest":
        """Parse a binary manifest stream as UTF-8 text."""
        reader = io.TextIOWrapper(stream, encoding="utf-8", newline=None)
        try:
            return cls.from_lines(reader, **kwargs)
        except UnicodeDecodeError as exc:
            raise ManifestError(f"Failed to read Jar Manifest: {exc}") from exc

    @classmethod
    def from_archive(
        cls,
        archive: MemberSource,
        *,
        manifest_path: str = MANIFEST_PATH,
        **kwargs: str,
    ) -> "JarManifest":
        """Locate and parse the manifest member of ``archive``."""
        try:
            stream = archive.open_member(manifest_path)
        except MemberNotFoundError as exc:
            raise ManifestError(
                "Jar does not contain a Manifest", context={"member": manifest_path}
            ) from exc

        with stream:
            manifest = cls.from_reader(stream, **kwargs)
        logger.debug(
            "Manifest declares layers index %s and classpath index %s",
            manifest.layers_index,
            manifest.classpath_index,
        )
        return manifest


__all__ = ["JarManifest", "MANIFEST_PATH", "PROP_LAYERS_INDEX", "PROP_CLASSPATH_INDEX"]
