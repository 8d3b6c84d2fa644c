"""Test helper modules for the layertools test suite.

- archives: DictMemberSource (in-memory MemberSource) and build_jar for real zip files
"""
from __future__ import annotations

from helpers.archives import (
    CLASSPATH_INDEX,
    CLASSPATH_YAML,
    LAYERED_MANIFEST,
    LAYERS_INDEX,
    LAYERS_YAML,
    MANIFEST_PATH,
    DictMemberSource,
    build_jar,
    corrupt_stored_bytes,
    layered_members,
)

__all__ = [
    "DictMemberSource",
    "build_jar",
    "corrupt_stored_bytes",
    "layered_members",
    "LAYERED_MANIFEST",
    "LAYERS_YAML",
    "CLASSPATH_YAML",
    "MANIFEST_PATH",
    "LAYERS_INDEX",
    "CLASSPATH_INDEX",
]
