# tests/test_context.py
"""
Tests for per-scope traversal state.
"""

from jsbastard.context import Context


class TestContext:

    def test_fresh_context(self):
        ctx = Context()
        assert ctx.position == 0
        assert ctx.using_strict is False
        assert ctx.parent is None
        assert ctx.depth == 0

    def test_child_links_to_parent(self):
        root = Context()
        child = root.child()
        grandchild = Context(child)
        assert child.parent is root
        assert grandchild.parent is child
        assert grandchild.depth == 2

    def test_child_starts_fresh(self):
        root = Context()
        root.using_strict = True
        root.advance()
        child = root.child()
        assert child.position == 0
        assert child.using_strict is False

    def test_advance(self):
        ctx = Context()
        for _ in range(3):
            ctx.advance()
        assert ctx.position == 3

    def test_parent_link_is_weak(self):
        root = Context()
        child = Context(root)
        del root
        assert child.parent is None

    def test_repr(self):
        ctx = Context()
        ctx.advance()
        assert repr(ctx) == "<Context depth=0 position=1 strict=False>"
