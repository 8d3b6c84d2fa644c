"""Classpath index listing."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .exceptions import IndexFormatError
from .index import ClasspathIndex

logger = logging.getLogger(__name__)


def list_classpath(tree: Any, *, index_name: Optional[str] = None) -> ClasspathIndex:
    """Return the classpath entries of ``tree`` in index order.

    Elements that are not strings are skipped.

    Raises:
        IndexFormatError: the document is not a sequence.
    """
    if not isinstance(tree, list):
        raise IndexFormatError(
            "Invalid classpath index yaml: expected array of strings",
            index=index_name,
        )

    entries = []
    for position, element in enumerate(tree):
        if isinstance(element, str):
            entries.append(element)
        else:
            logger.debug("Skipping non-string classpath element %d: %r", position, element)
    return ClasspathIndex(entries=tuple(entries))


__all__ = ["list_classpath"]
