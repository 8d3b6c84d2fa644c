"""
layertools extract command.

SUMMARY: Extracts layers from the jar for image creation
"""

from __future__ import annotations

import argparse
import logging

from layertools.cli import (
    OutputFormatter,
    add_destination_arg,
    add_layers_arg,
    add_standard_flags,
    open_layered_jar,
    parse_layer_selection,
    prepare_invocation,
    resolve_destination,
)
from layertools.core.exceptions import LayertoolsError
from layertools.core.extract import extract_layers
from layertools.core.index import load_index
from layertools.core.planner import plan_layers

SUMMARY = "Extracts layers from the jar for image creation"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    add_destination_arg(parser)
    add_layers_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config = prepare_invocation(args)
        destination = resolve_destination(args, config)
        requested = parse_layer_selection(getattr(args, "layers", None))

        with open_layered_jar(args.jar, config) as (archive, manifest):
            tree = load_index(archive, manifest.layers_index)
            plan = plan_layers(tree, requested, index_name=manifest.layers_index)
            logger.info("Extracting %d layer(s) to %s", len(plan), destination)
            reports = extract_layers(archive, destination, plan)

        formatter.success(
            {
                "destination": str(destination),
                "layers": [r.to_dict() for r in reports],
            }
        )
        return 0
    except LayertoolsError as e:
        formatter.error(e, error_code="extract_error")
        return 1
