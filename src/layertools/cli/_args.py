"""Common CLI argument registration utilities.

This module provides reusable argument registration functions shared by the
layertools commands.
"""
from __future__ import annotations

import argparse
from pathlib import Path


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode.

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag (debug logging on stderr or the configured log file).

    Args:
        parser: ArgumentParser to add the flag to
    """
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def add_destination_arg(parser: argparse.ArgumentParser) -> None:
    """Add --destination for the extraction root.

    The default is resolved from configuration (``extract.destination``).
    """
    parser.add_argument(
        "--destination",
        type=Path,
        default=None,
        help="The destination to extract files to (default: current directory)",
    )


def add_layers_arg(parser: argparse.ArgumentParser) -> None:
    """Add --layers/--layer (repeatable, comma-delimited)."""
    parser.add_argument(
        "--layers",
        "--layer",
        dest="layers",
        action="append",
        default=[],
        metavar="NAME[,NAME...]",
        help="The layers to extract. By default, all layers are extracted",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every command accepts (--json, --verbose)."""
    add_json_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_json_flag",
    "add_verbose_flag",
    "add_destination_arg",
    "add_layers_arg",
    "add_standard_flags",
]
