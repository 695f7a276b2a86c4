"""Bulk apply: translate every element of a document tree carrying an attribute."""

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from babelchain.errors import ApplyFailure, InvalidArgument

_log = logging.getLogger(__name__)

Resolver = Callable[[str, str, Any], Any]
Applier = Callable[[str, str, Any, Any], Any]


def assign_text(language: str, key: str, value: Any, node: Any) -> bool:
    """Default applier: replace the node's text with the translated value."""
    node.text = value if isinstance(value, str) else str(value)
    return True


def find_nodes(root: Any, attribute: str) -> list:
    """Return every node under (and including) ``root`` that carries ``attribute``."""
    if not callable(getattr(root, "iter", None)):
        raise InvalidArgument(f"root must expose iter(), got {type(root).__name__}")
    return [node for node in root.iter() if node.get(attribute) is not None]


async def _call(func: Callable, *args):
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def apply_tree(
    language: str,
    root: Any,
    attribute: str,
    resolver: Resolver,
    applier: Applier = assign_text,
) -> int:
    """Translate all matching nodes; returns how many were applied.

    The first applier returning a falsy result aborts the walk with
    :class:`ApplyFailure`. Nodes already applied keep their new text.
    """
    if not isinstance(attribute, str) or not attribute:
        raise InvalidArgument("attribute must be a non-empty string")

    nodes = find_nodes(root, attribute)
    _log.debug("Applying language '%s' to %d nodes via '%s'", language, len(nodes), attribute)
    applied = 0
    for node in nodes:
        key = node.get(attribute)
        value = await _call(resolver, language, key, node)
        if not await _call(applier, language, key, value, node):
            raise ApplyFailure(
                f"applier failed for key '{key}' in language '{language}' "
                f"after {applied} of {len(nodes)} nodes"
            )
        applied += 1
        # let other tasks run between nodes on large documents
        await asyncio.sleep(0)
    return applied
