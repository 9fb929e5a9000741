"""
jsbastard — structural style checker for JavaScript scripts
===========================================================

Parses a script with esprima and walks the tree scope by scope, reporting:

  • scripts not wrapped in an immediately-invoked function expression
  • named function declarations
  • ``var`` statements that are not the first statement of their function
    (a leading ``"use strict"`` is allowed before them)
  • variable bindings spanning more than one line
  • empty statements

Quick start
-----------
>>> from jsbastard import lint_string
>>> [c.message for c in lint_string("var x = 1;")]
['The script must be inside a closure']

Package layout
--------------
::

    jsbastard/
    ├── __init__.py      ← this file
    ├── __main__.py      python -m jsbastard
    ├── ast_helper.py    node accessors (esprima objects or dicts)
    ├── complaints.py    Complaint, sinks, output formats
    ├── context.py       per-scope traversal state
    ├── errors.py        acquisition error hierarchy
    ├── linter.py        read → parse → lint driver
    ├── main.py          command-line interface
    ├── parser.py        esprima adapter
    └── rules.py         the rule engine
"""

from __future__ import annotations

import logging
from typing import List

__version__ = "0.2.0"
__license__ = "MIT"

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

from jsbastard.complaints import (  # noqa: E402
    Complaint,
    ComplaintCollector,
    ComplaintSink,
    StreamSink,
)
from jsbastard.context import Context  # noqa: E402
from jsbastard.errors import (  # noqa: E402
    AcquisitionError,
    JsBastardError,
    ParseError,
    ReadError,
)
from jsbastard.linter import Linter, LinterOptions, LintReport, lint_string  # noqa: E402
from jsbastard.rules import (  # noqa: E402
    ExpressionKind,
    InstructionKind,
    RuleRegistry,
    Script,
    default_registry,
    lint_ast,
)

__all__: List[str] = [
    "__version__",
    "Complaint",
    "ComplaintCollector",
    "ComplaintSink",
    "StreamSink",
    "Context",
    "JsBastardError",
    "AcquisitionError",
    "ReadError",
    "ParseError",
    "Linter",
    "LinterOptions",
    "LintReport",
    "lint_string",
    "ExpressionKind",
    "InstructionKind",
    "RuleRegistry",
    "Script",
    "default_registry",
    "lint_ast",
]
