"""Shared CLI utilities.

Every command opens the jar once, reads its manifest, then works against the
archive until the command returns.
"""
from __future__ import annotations

import argparse
from contextlib import contextmanager
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, Optional, Tuple

from layertools.core.archive import MemberSource, open_jar
from layertools.core.config import LayertoolsConfig, load_config
from layertools.core.manifest import JarManifest
from layertools.core.stdlib_logging import configure_stdlib_logging


def prepare_invocation(args: argparse.Namespace) -> LayertoolsConfig:
    """Load configuration and set up logging for one command invocation."""
    config = load_config()
    level = "DEBUG" if getattr(args, "verbose", False) else config.log_level
    configure_stdlib_logging(level=level, log_path=config.log_file)
    return config


@contextmanager
def open_layered_jar(
    jar: Path, config: LayertoolsConfig
) -> Iterator[Tuple[MemberSource, JarManifest]]:
    """Open ``jar`` and parse its manifest; the archive stays open for the block."""
    with open_jar(jar) as archive:
        manifest = JarManifest.from_archive(
            archive,
            manifest_path=config.manifest_path,
            **config.manifest_properties(),
        )
        yield archive, manifest


def parse_layer_selection(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Union of comma-delimited ``--layers`` values; empty means every layer."""
    selected = set()
    for value in values or ():
        for name in str(value).split(","):
            name = name.strip()
            if name:
                selected.add(name)
    return frozenset(selected)


def resolve_destination(args: argparse.Namespace, config: LayertoolsConfig) -> Path:
    destination = getattr(args, "destination", None)
    return Path(destination) if destination is not None else config.destination


__all__ = [
    "prepare_invocation",
    "open_layered_jar",
    "parse_layer_selection",
    "resolve_destination",
]
