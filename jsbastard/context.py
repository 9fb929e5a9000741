"""Per-scope traversal state threaded through the rule engine."""

from __future__ import annotations

import weakref
from typing import Optional


class Context:
    """
    State of one scope while its statements are being walked.

    A context is created when a body traversal begins and dropped when it
    ends; it is only ever passed by argument.  ``position`` counts the
    statements already visited in the scope, unknown ones included.
    ``using_strict`` is set once a ``"use strict"`` pragma has been seen.
    """

    def __init__(self, parent: Optional[Context] = None) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None
        self.using_strict = False
        self.position = 0

    @property
    def parent(self) -> Optional[Context]:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def depth(self) -> int:
        depth = 0
        ctx = self.parent
        while ctx is not None:
            depth += 1
            ctx = ctx.parent
        return depth

    def child(self) -> Context:
        return Context(self)

    def advance(self) -> None:
        self.position += 1

    def __repr__(self) -> str:
        return (
            f"<Context depth={self.depth} position={self.position} "
            f"strict={self.using_strict}>"
        )
