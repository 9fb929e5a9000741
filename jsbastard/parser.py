"""
jsbastard/parser.py — esprima adapter.

Turns script source into a location-annotated ESTree with the collected
comments attached to the root as ``comments``.
"""

from __future__ import annotations

import logging
from typing import Any

import esprima
from esprima.error_handler import Error as EsprimaError

from jsbastard.errors import ParseError

logger = logging.getLogger(__name__)

PARSE_OPTIONS = {
    "loc": True,
    "comment": True,
}


def parse_source(source: str, filename: str = "") -> Any:
    """Parse ``source`` as an ES5 script.

    Raises
    ------
    ParseError
        When esprima rejects the source or runs out of stack on it.
    """
    try:
        ast = esprima.parseScript(source, **PARSE_OPTIONS)
    except EsprimaError as exc:
        raise ParseError(
            getattr(exc, "description", None) or str(exc),
            filename=filename,
            line=getattr(exc, "lineNumber", 0) or 0,
            column=getattr(exc, "column", 0) or 0,
        ) from exc
    except RecursionError as exc:
        # esprima descends recursively; deeply nested input exhausts the stack
        raise ParseError("Source is nested too deeply to parse", filename=filename) from exc
    logger.debug(
        "Parsed %s: %d top-level statement(s), %d comment(s)",
        filename or "<string>",
        len(ast.body or ()),
        len(ast.comments or ()),
    )
    return ast
