"""
jsbastard/rules.py
══════════════════

The structural rule engine: closure detection, scope-by-scope body
traversal and per-statement rules.

Architecture
────────────

  Script ──► Closure ──► Body ──┬──► Instruction (one per statement kind)
     │                          │       ├── FunctionDeclaration ──► Body (recursion)
     │                          │       ├── VariableDeclaration ──► Declaration
     │                          │       ├── ExpressionStatement ──► Expression
     │                          │       ├── ForStatement / IfStatement (hooks)
     │                          │       └── EmptyStatement
     │                          └──► Context (position / strict flag)
     └──► Comments

Each statement kind is a member of :class:`InstructionKind`; each
expression kind a member of :class:`ExpressionKind`.  A
:class:`RuleRegistry` binds every kind to the class that validates it.
Registering a class replaces the slot for its kind, so new rules plug in
without touching :class:`Body`.  A node whose kind is unknown, or whose
slot is empty, is logged and skipped.

Complaints are streamed to the caller's sink as they are found.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Sequence, Type, TypeVar, Union

from jsbastard.ast_helper import (
    Node,
    describe,
    is_type,
    node_children,
    node_get,
    node_path,
    node_start,
    node_type,
    spans_lines,
    statements,
)
from jsbastard.complaints import (
    CLOSURE_REQUIRED,
    EMPTY_STATEMENT,
    MULTILINE_VAR,
    NAMED_FUNCTION,
    VAR_NOT_FIRST,
    Complaint,
    ComplaintSink,
)
from jsbastard.context import Context

logger = logging.getLogger(__name__)

USE_STRICT = "use strict"

_K = TypeVar("_K", bound=Enum)


def _classify(kinds: Type[_K], node: Node) -> Optional[_K]:
    try:
        return kinds(node_type(node))
    except ValueError:
        return None


def _complain_at(complain: ComplaintSink, rule: str, node: Node) -> None:
    line, column = node_start(node)
    complain(Complaint.for_rule(rule, line, column))


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — NODE KINDS
# ═════════════════════════════════════════════════════════════════════════

class InstructionKind(Enum):
    """Statement kinds the engine knows how to validate."""
    FUNCTION_DECLARATION = "FunctionDeclaration"
    VARIABLE_DECLARATION = "VariableDeclaration"
    FOR_STATEMENT = "ForStatement"
    EMPTY_STATEMENT = "EmptyStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    IF_STATEMENT = "IfStatement"

    @classmethod
    def classify(cls, node: Node) -> Optional[InstructionKind]:
        """Map a statement node to its kind, ``None`` if unrecognized."""
        return _classify(cls, node)


class ExpressionKind(Enum):
    """Expression kinds reachable from an expression statement."""
    ASSIGNMENT_EXPRESSION = "AssignmentExpression"

    @classmethod
    def classify(cls, node: Node) -> Optional[ExpressionKind]:
        return _classify(cls, node)


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — RULE BASE CLASSES
# ═════════════════════════════════════════════════════════════════════════

class Instruction(ABC):
    """
    Validates one statement of a scope.

    Subclass Contract
    ─────────────────
      - Set ``kind`` to the :class:`InstructionKind` handled
      - Implement ``lint(complain, context)``; ``context`` is the scope's
        shared context, already positioned on this statement
    """

    kind: ClassVar[InstructionKind]

    def __init__(self, node: Node, registry: RuleRegistry) -> None:
        self.node = node
        self.registry = registry

    @abstractmethod
    def lint(self, complain: ComplaintSink, context: Context) -> None:
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {describe(self.node)}>"


class Expression(ABC):
    """Validates the expression carried by an expression statement."""

    kind: ClassVar[ExpressionKind]

    def __init__(self, node: Node, registry: RuleRegistry) -> None:
        self.node = node
        self.registry = registry

    @abstractmethod
    def lint(self, complain: ComplaintSink, context: Context) -> None:
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {describe(self.node)}>"


class Comments:
    """
    Whole-file pass over the collected comments.

    No rule is active yet.  It sees the comment list only, never a
    context, so it cannot influence statement traversal.
    """

    def __init__(self, comments: Optional[Sequence[Node]]) -> None:
        self.comments = list(comments or ())

    def lint(self, complain: ComplaintSink) -> None:
        pass


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — RULE REGISTRY
# ═════════════════════════════════════════════════════════════════════════

RuleClass = Union[Type[Instruction], Type[Expression], Type[Comments]]


class RuleRegistry:
    """
    Binds statement and expression kinds to their rule classes.

    Usage
    -----
    >>> registry = default_registry()
    >>> registry.register(MyForStatementRule)   # replaces the ForStatement slot
    >>> registry.unregister(InstructionKind.IF_STATEMENT)
    >>> Script(ast, registry).lint(complain)
    """

    def __init__(self) -> None:
        self._instructions: Dict[InstructionKind, Type[Instruction]] = {}
        self._expressions: Dict[ExpressionKind, Type[Expression]] = {}
        self.comment_rule: Type[Comments] = Comments

    def register(self, rule_cls: RuleClass) -> RuleClass:
        """Fill (or replace) the slot of ``rule_cls.kind``."""
        if issubclass(rule_cls, Instruction):
            self._instructions[rule_cls.kind] = rule_cls
        elif issubclass(rule_cls, Expression):
            self._expressions[rule_cls.kind] = rule_cls
        elif issubclass(rule_cls, Comments):
            self.comment_rule = rule_cls
        else:
            raise TypeError(f"not a rule class: {rule_cls!r}")
        return rule_cls

    def unregister(self, kind: Union[InstructionKind, ExpressionKind]) -> None:
        """Empty a slot; nodes of that kind are then treated as unrecognized."""
        if isinstance(kind, InstructionKind):
            self._instructions.pop(kind, None)
        else:
            self._expressions.pop(kind, None)

    def instruction_for(self, kind: InstructionKind) -> Optional[Type[Instruction]]:
        return self._instructions.get(kind)

    def expression_for(self, kind: ExpressionKind) -> Optional[Type[Expression]]:
        return self._expressions.get(kind)

    def make_instruction(self, node: Node) -> Optional[Instruction]:
        kind = InstructionKind.classify(node)
        rule_cls = self.instruction_for(kind) if kind is not None else None
        if rule_cls is None:
            logger.warning("Unhandled instruction type: %s", node_type(node))
            return None
        return rule_cls(node, self)

    def make_expression(self, node: Node) -> Optional[Expression]:
        kind = ExpressionKind.classify(node)
        rule_cls = self.expression_for(kind) if kind is not None else None
        if rule_cls is None:
            logger.warning("Unhandled expression type: %s", node_type(node))
            return None
        return rule_cls(node, self)

    def make_comments(self, comments: Optional[Sequence[Node]]) -> Comments:
        return self.comment_rule(comments)

    def copy(self) -> RuleRegistry:
        clone = RuleRegistry()
        clone._instructions = dict(self._instructions)
        clone._expressions = dict(self._expressions)
        clone.comment_rule = self.comment_rule
        return clone

    @property
    def instruction_kinds(self) -> List[InstructionKind]:
        return [k for k in InstructionKind if k in self._instructions]

    @property
    def expression_kinds(self) -> List[ExpressionKind]:
        return [k for k in ExpressionKind if k in self._expressions]


# ═════════════════════════════════════════════════════════════════════════
#  PART 4 — SCRIPT, CLOSURE, BODY
# ═════════════════════════════════════════════════════════════════════════

class Script:
    """Root of one file: closure check, body walk, then the comment pass."""

    def __init__(self, ast: Node, registry: Optional[RuleRegistry] = None) -> None:
        self.ast = ast
        self.registry = registry or _DEFAULT_REGISTRY

    def lint(self, complain: ComplaintSink, parent_context: Optional[Context] = None) -> None:
        context = Context(parent_context)
        closure = Closure(self.ast, self.registry)

        if closure.is_actual_closure():
            body = closure.body()
        else:
            line, column = node_start(self.ast)
            # esprima places an empty program at line 0
            complain(Complaint.for_rule(CLOSURE_REQUIRED, max(line, 1), column))
            body = Body(node_children(self.ast, "body"), self.registry)

        body.lint(complain, context)

        try:
            comments = self.registry.make_comments(node_get(self.ast, "comments"))
            comments.lint(complain)
        except Exception:
            logger.exception("Comment rule %s failed", self.registry.comment_rule.__name__)


class Closure:
    """Recognizes ``(function () { ... }())`` wrapping the whole script."""

    def __init__(self, ast: Node, registry: Optional[RuleRegistry] = None) -> None:
        self.ast = ast
        self.registry = registry or _DEFAULT_REGISTRY

    def _first_callee(self) -> Node:
        top = node_children(self.ast, "body")
        if len(top) != 1:
            return None
        return node_path(top[0], "expression", "callee")

    def is_actual_closure(self) -> bool:
        top = node_children(self.ast, "body")
        if len(top) != 1 or not is_type(top[0], "ExpressionStatement"):
            return False
        call = node_get(top[0], "expression")
        if not is_type(call, "CallExpression"):
            return False
        callee = node_get(call, "callee")
        return (
            is_type(callee, "FunctionExpression")
            and is_type(node_get(callee, "body"), "BlockStatement")
        )

    def body(self) -> Body:
        block = node_path(self._first_callee(), "body")
        return Body(node_children(block, "body"), self.registry)


class Body:
    """
    Walks the statements of one scope in source order.

    Every statement, recognized or not, advances the scope position by
    one.  A rule that raises is logged and the walk continues with the
    next sibling.
    """

    def __init__(self, ast: Optional[Sequence[Node]], registry: Optional[RuleRegistry] = None) -> None:
        self.ast = statements(ast)
        self.registry = registry or _DEFAULT_REGISTRY

    def lint(self, complain: ComplaintSink, parent_context: Optional[Context] = None) -> None:
        context = Context(parent_context)
        logger.debug("Linting %d statement(s) at depth %d", len(self.ast), context.depth)

        for statement in self.ast:
            try:
                instruction = self.make_instruction(statement)
                if instruction is not None:
                    instruction.lint(complain, context)
            except Exception:
                logger.exception("Rule failed on %s", describe(statement))
            context.advance()

    def make_instruction(self, node: Node) -> Optional[Instruction]:
        return self.registry.make_instruction(node)


# ═════════════════════════════════════════════════════════════════════════
#  PART 5 — INSTRUCTIONS
# ═════════════════════════════════════════════════════════════════════════

class FunctionDeclaration(Instruction):
    kind = InstructionKind.FUNCTION_DECLARATION

    def lint(self, complain: ComplaintSink, context: Context) -> None:
        _complain_at(complain, NAMED_FUNCTION, self.node)

        block = node_get(self.node, "body")
        if block is None:
            logger.warning("Function declaration without a body: %s", describe(self.node))
            return
        body = Body(node_children(block, "body"), self.registry)
        body.lint(complain, Context(context))


class VariableDeclaration(Instruction):
    kind = InstructionKind.VARIABLE_DECLARATION

    def lint(self, complain: ComplaintSink, context: Context) -> None:
        if not self.is_first_in_context(context):
            _complain_at(complain, VAR_NOT_FIRST, self.node)

        for declarator in node_children(self.node, "declarations"):
            Declaration(declarator).lint(complain)

    @staticmethod
    def is_first_in_context(context: Context) -> bool:
        # a leading "use strict" occupies slot 0
        return context.position == 0 or (
            context.position == 1 and context.using_strict
        )


class ExpressionStatement(Instruction):
    kind = InstructionKind.EXPRESSION_STATEMENT

    def lint(self, complain: ComplaintSink, context: Context) -> None:
        if self.is_use_strict():
            context.using_strict = True
            return

        expression = self.make_expression(node_get(self.node, "expression"))
        if expression is not None:
            expression.lint(complain, Context(context))

    def is_use_strict(self) -> bool:
        expression = node_get(self.node, "expression")
        return (
            is_type(expression, "Literal")
            and node_get(expression, "value") == USE_STRICT
        )

    def make_expression(self, node: Node) -> Optional[Expression]:
        return self.registry.make_expression(node)


class ForStatement(Instruction):
    kind = InstructionKind.FOR_STATEMENT

    def lint(self, complain: ComplaintSink, context: Context) -> None:
        pass


class IfStatement(Instruction):
    kind = InstructionKind.IF_STATEMENT

    def lint(self, complain: ComplaintSink, context: Context) -> None:
        pass


class EmptyStatement(Instruction):
    kind = InstructionKind.EMPTY_STATEMENT

    def lint(self, complain: ComplaintSink, context: Context) -> None:
        _complain_at(complain, EMPTY_STATEMENT, self.node)


# ═════════════════════════════════════════════════════════════════════════
#  PART 6 — EXPRESSIONS AND DECLARATIONS
# ═════════════════════════════════════════════════════════════════════════

class AssignmentExpression(Expression):
    kind = ExpressionKind.ASSIGNMENT_EXPRESSION

    def lint(self, complain: ComplaintSink, context: Context) -> None:
        pass


class Declaration:
    """One binding of a ``var`` statement, checked on its own span."""

    def __init__(self, ast: Node) -> None:
        self.ast = ast

    def lint(self, complain: ComplaintSink) -> None:
        if spans_lines(self.ast):
            _complain_at(complain, MULTILINE_VAR, self.ast)


# ═════════════════════════════════════════════════════════════════════════
#  PART 7 — DEFAULT REGISTRY
# ═════════════════════════════════════════════════════════════════════════

_DEFAULT_REGISTRY = RuleRegistry()
_DEFAULT_REGISTRY.register(FunctionDeclaration)
_DEFAULT_REGISTRY.register(VariableDeclaration)
_DEFAULT_REGISTRY.register(ForStatement)
_DEFAULT_REGISTRY.register(EmptyStatement)
_DEFAULT_REGISTRY.register(ExpressionStatement)
_DEFAULT_REGISTRY.register(IfStatement)
_DEFAULT_REGISTRY.register(AssignmentExpression)


def default_registry() -> RuleRegistry:
    """A fresh copy of the built-in rules, safe to modify."""
    return _DEFAULT_REGISTRY.copy()


def lint_ast(
    ast: Node,
    complain: ComplaintSink,
    registry: Optional[RuleRegistry] = None,
) -> None:
    """Run every rule over a parsed program, streaming complaints."""
    Script(ast, registry).lint(complain, Context())


__all__ = [
    "USE_STRICT",
    "InstructionKind",
    "ExpressionKind",
    "Instruction",
    "Expression",
    "Comments",
    "RuleRegistry",
    "Script",
    "Closure",
    "Body",
    "FunctionDeclaration",
    "VariableDeclaration",
    "ExpressionStatement",
    "ForStatement",
    "IfStatement",
    "EmptyStatement",
    "AssignmentExpression",
    "Declaration",
    "default_registry",
    "lint_ast",
]
