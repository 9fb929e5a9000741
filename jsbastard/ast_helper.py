# -*- coding: utf-8 -*-
"""
jsbastard/ast_helper.py
═══════════════════════

Read-only accessors over ESTree nodes.

The rule engine works on two node representations:

  • esprima node objects (attribute access, missing attributes → None)
  • plain dictionaries (``node.toDict()`` output or hand-built trees)

Every helper accepts either and never raises on a missing field; absent
values come back as ``None`` (or an empty sequence / ``(0, 0)`` where
noted), so a malformed subtree degrades to "nothing to check".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple

# esprima nodes and their dict form share the same shape
Node = Any


def node_get(node: Node, key: str, default: Any = None) -> Any:
    """Return field ``key`` of ``node`` or ``default``."""
    if node is None:
        return default
    if isinstance(node, Mapping):
        value = node.get(key, default)
    else:
        value = getattr(node, key, default)
    return default if value is None else value


def node_path(node: Node, *keys: str) -> Any:
    """Follow ``keys`` down the tree; ``None`` as soon as a link is missing."""
    for key in keys:
        node = node_get(node, key)
        if node is None:
            return None
    return node


def node_type(node: Node) -> Optional[str]:
    return node_get(node, "type")


def is_type(node: Node, type_name: str) -> bool:
    return node_type(node) == type_name


def node_children(node: Node, key: str) -> List[Node]:
    """Return the list stored under ``key`` (``[]`` when absent)."""
    value = node_get(node, key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def node_start(node: Node) -> Tuple[int, int]:
    """(line, column) where ``node`` starts; ``(0, 0)`` without location."""
    start = node_path(node, "loc", "start")
    return (node_get(start, "line", 0), node_get(start, "column", 0))


def node_end(node: Node) -> Tuple[int, int]:
    end = node_path(node, "loc", "end")
    return (node_get(end, "line", 0), node_get(end, "column", 0))


def spans_lines(node: Node) -> bool:
    """True iff the node ends on a later line than it starts."""
    if node_path(node, "loc") is None:
        return False
    return node_end(node)[0] > node_start(node)[0]


def describe(node: Node) -> str:
    """Short ``Type@line:column`` label used in log messages."""
    line, column = node_start(node)
    return f"{node_type(node) or '<untyped>'}@{line}:{column}"


def statements(nodes: Optional[Sequence[Node]]) -> List[Node]:
    if nodes is None:
        return []
    return list(nodes)
