from __future__ import annotations

from typing import Any, Dict, Mapping


class LayertoolsError(Exception):
    """Base exception for layertools."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ManifestError(LayertoolsError, ValueError):
    """Raised when the jar manifest is absent or does not declare the layer indexes."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LayertoolsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class MemberNotFoundError(LayertoolsError, FileNotFoundError):
    """Raised when a named archive member does not exist."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LayertoolsError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class UnknownLayerFileError(MemberNotFoundError):
    """Raised when a layer declares a file that the archive does not contain."""

    def __init__(self, layer: str, entry: str) -> None:
        super().__init__(
            f"unknown file {entry} in layer {layer}",
            context={"layer": layer, "entry": entry},
        )
        self.layer = layer
        self.entry = entry


class IndexFormatError(LayertoolsError, ValueError):
    """Raised when an index member cannot be decoded, parsed, or has the wrong shape."""

    def __init__(
        self,
        message: str,
        *,
        index: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if index:
            ctx["index"] = index
        LayertoolsError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class LayerPlanError(LayertoolsError, ValueError):
    """Raised when a layer index element is not a single-key layer mapping."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LayertoolsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class PathTraversalError(LayertoolsError, ValueError):
    """Raised when a resolved output path would escape its root directory."""

    def __init__(self, message: str, *, path: str, root: str | None = None) -> None:
        ctx: Dict[str, Any] = {"path": path}
        if root is not None:
            ctx["root"] = root
        LayertoolsError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.path = path


class ExtractionIOError(LayertoolsError, OSError):
    """Raised when creating directories or writing extracted files fails."""

    def __init__(self, message: str, *, path: str, operation: str | None = None) -> None:
        ctx: Dict[str, Any] = {"path": path}
        if operation:
            ctx["operation"] = operation
        LayertoolsError.__init__(self, message, context=ctx)
        OSError.__init__(self, message)
        self.path = path


class ConfigError(LayertoolsError, ValueError):
    """Raised when the merged configuration is invalid."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LayertoolsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "LayertoolsError",
    "ManifestError",
    "MemberNotFoundError",
    "UnknownLayerFileError",
    "IndexFormatError",
    "LayerPlanError",
    "PathTraversalError",
    "ExtractionIOError",
    "ConfigError",
]
