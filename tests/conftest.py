# tests/conftest.py
"""
Shared fixtures and hand-built ESTree nodes for the jsbastard tests.

Nodes are plain dicts shaped like ``esprima`` output with ``loc=True``.
"""

import pytest

from jsbastard.complaints import ComplaintCollector


def loc(line, column, end_line=None, end_column=None):
    return {
        "start": {"line": line, "column": column},
        "end": {
            "line": line if end_line is None else end_line,
            "column": column + 1 if end_column is None else end_column,
        },
    }


def node(type_, line=1, column=0, end_line=None, **fields):
    result = {"type": type_, "loc": loc(line, column, end_line)}
    result.update(fields)
    return result


def declarator(line=1, column=4, end_line=None, name="x"):
    return node(
        "VariableDeclarator",
        line, column, end_line,
        id={"type": "Identifier", "name": name},
        init={"type": "Literal", "value": 1},
    )


def var(*declarators, line=1, column=0):
    if not declarators:
        declarators = (declarator(line, column + 4),)
    return node("VariableDeclaration", line, column, declarations=list(declarators), kind="var")


def use_strict(line=1, column=0):
    return node(
        "ExpressionStatement", line, column,
        expression=node("Literal", line, column, value="use strict"),
    )


def assignment(line=1, column=0):
    return node(
        "ExpressionStatement", line, column,
        expression=node("AssignmentExpression", line, column, operator="="),
    )


def function_declaration(*body, line=1, column=0, name="f"):
    return node(
        "FunctionDeclaration", line, column,
        id={"type": "Identifier", "name": name},
        body=node("BlockStatement", line, column, body=list(body)),
    )


def program(*body, comments=None, line=1, column=0):
    return node("Program", line, column, body=list(body), comments=comments or [])


def iife(*body, comments=None):
    """``(function () { <body> }());`` as a Program node."""
    callee = node(
        "FunctionExpression", 1, 1,
        params=[],
        body=node("BlockStatement", 1, 12, body=list(body)),
    )
    call = node("CallExpression", 1, 1, callee=callee, arguments=[])
    return program(node("ExpressionStatement", 1, 0, expression=call), comments=comments)


@pytest.fixture
def collector():
    return ComplaintCollector()
