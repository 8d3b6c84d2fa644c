"""
layertools list command.

SUMMARY: List layers from the jar that can be extracted
"""

from __future__ import annotations

import argparse

from layertools.cli import OutputFormatter, add_standard_flags, open_layered_jar, prepare_invocation
from layertools.core.exceptions import LayertoolsError
from layertools.core.index import load_index
from layertools.core.planner import layer_names

SUMMARY = "List layers from the jar that can be extracted"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config = prepare_invocation(args)
        with open_layered_jar(args.jar, config) as (archive, manifest):
            tree = load_index(archive, manifest.layers_index)
            names = layer_names(tree, index_name=manifest.layers_index)

        if formatter.json_mode:
            formatter.json_output({"layers": names})
        else:
            formatter.lines(names)
        return 0
    except LayertoolsError as e:
        formatter.error(e, error_code="list_error")
        return 1
