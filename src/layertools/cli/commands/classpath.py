"""
layertools classpath command.

SUMMARY: List classpath dependencies from the jar
"""

from __future__ import annotations

import argparse

from layertools.cli import OutputFormatter, add_standard_flags, open_layered_jar, prepare_invocation
from layertools.core.classpath import list_classpath
from layertools.core.exceptions import LayertoolsError
from layertools.core.index import load_index

SUMMARY = "List classpath dependencies from the jar"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        config = prepare_invocation(args)
        with open_layered_jar(args.jar, config) as (archive, manifest):
            tree = load_index(archive, manifest.classpath_index)
            classpath = list_classpath(tree, index_name=manifest.classpath_index)

        if formatter.json_mode:
            formatter.json_output({"classpath": list(classpath)})
        else:
            formatter.lines(list(classpath))
        return 0
    except LayertoolsError as e:
        formatter.error(e, error_code="classpath_error")
        return 1
