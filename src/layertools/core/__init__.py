"""Core layered-jar operations: manifest discovery, index loading, planning and extraction."""

from .archive import MemberSource, ZipMemberSource, enclosed_name, open_jar
from .classpath import list_classpath
from .exceptions import (
    ConfigError,
    ExtractionIOError,
    IndexFormatError,
    LayerPlanError,
    LayertoolsError,
    ManifestError,
    MemberNotFoundError,
    PathTraversalError,
    UnknownLayerFileError,
)
from .extract import LayerReport, expand_directory, extract_layer, extract_layers
from .index import ClasspathIndex, LayerEntry, LayerIndex, StructuredTextParser, YamlParser, load_index
from .manifest import JarManifest
from .planner import layer_names, parse_layer_index, plan_layers

__all__ = [
    "MemberSource",
    "ZipMemberSource",
    "enclosed_name",
    "open_jar",
    "list_classpath",
    "LayertoolsError",
    "ConfigError",
    "ExtractionIOError",
    "IndexFormatError",
    "LayerPlanError",
    "ManifestError",
    "MemberNotFoundError",
    "PathTraversalError",
    "UnknownLayerFileError",
    "LayerReport",
    "expand_directory",
    "extract_layer",
    "extract_layers",
    "ClasspathIndex",
    "LayerEntry",
    "LayerIndex",
    "StructuredTextParser",
    "YamlParser",
    "load_index",
    "JarManifest",
    "layer_names",
    "parse_layer_index",
    "plan_layers",
]
