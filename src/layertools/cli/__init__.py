"""
layertools CLI package.

Provides the command-line interface with auto-discovery of commands
from the commands/ subfolder (list, extract, classpath).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_verbose_flag,
    add_destination_arg,
    add_layers_arg,
    add_standard_flags,
)
from ._utils import (
    prepare_invocation,
    open_layered_jar,
    parse_layer_selection,
    resolve_destination,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_verbose_flag",
    "add_destination_arg",
    "add_layers_arg",
    "add_standard_flags",
    # Utilities
    "prepare_invocation",
    "open_layered_jar",
    "parse_layer_selection",
    "resolve_destination",
]
