"""Interpretation of the parsed layer index into an extraction plan."""

from __future__ import annotations

import logging
from typing import AbstractSet, Any, List, Optional

from .exceptions import IndexFormatError, LayerPlanError
from .index import LayerEntry, LayerIndex

logger = logging.getLogger(__name__)


def _layer_entry(element: Any, position: int) -> LayerEntry:
    if not isinstance(element, dict) or len(element) != 1:
        raise LayerPlanError(
            f"Invalid layer index: element {position} is not a single-key layer mapping",
            context={"position": position},
        )

    ((name, files),) = element.items()
    if not isinstance(name, str):
        raise LayerPlanError(
            f"Invalid layer index: layer name at element {position} is not a string: {name!r}",
            context={"position": position},
        )

    if files is None:
        return LayerEntry(name=name)
    if not isinstance(files, list):
        raise LayerPlanError(
            f"Invalid layer index: layer {name} must map to a list of entries",
            context={"layer": name},
        )

    for entry in files:
        if not isinstance(entry, str):
            raise LayerPlanError(
                f"Invalid layer index: layer {name} declares a non-string entry: {entry!r}",
                context={"layer": name},
            )
    return LayerEntry(name=name, files=tuple(files))


def parse_layer_index(tree: Any, *, index_name: Optional[str] = None) -> LayerIndex:
    """Turn the generic layer-index tree into a :class:`LayerIndex`.

    Raises:
        IndexFormatError: the document is not a sequence.
        LayerPlanError: an element is not a single-key ``name: [entries]`` mapping.
    """
    if not isinstance(tree, list):
        raise IndexFormatError(
            "Invalid layer index yaml: expected array of layer mappings",
            index=index_name,
        )
    return LayerIndex(layers=tuple(_layer_entry(el, i) for i, el in enumerate(tree)))


def plan_layers(
    tree: Any,
    requested: AbstractSet[str] = frozenset(),
    *,
    index_name: Optional[str] = None,
) -> LayerIndex:
    """Select the layers to extract, in index order.

    An empty ``requested`` set selects every layer.
    """
    index = parse_layer_index(tree, index_name=index_name)
    if not requested:
        return index

    selected = tuple(layer for layer in index if layer.name in requested)
    unknown = sorted(set(requested) - {layer.name for layer in selected})
    if unknown:
        logger.info("Requested layers not present in index: %s", ", ".join(unknown))
    return LayerIndex(layers=selected)


def layer_names(tree: Any, *, index_name: Optional[str] = None) -> List[str]:
    """Layer names in index order."""
    return parse_layer_index(tree, index_name=index_name).names()


__all__ = ["parse_layer_index", "plan_layers", "layer_names"]
