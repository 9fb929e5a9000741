"""
jsbastard/complaints.py
═══════════════════════

Complaint model, canonical rule messages and complaint sinks.

A complaint is a purely informational finding: it carries no severity and
is never raised.  The rule engine hands every complaint to a *sink*, which
is any callable taking a single :class:`Complaint`.  The core never
attaches a filename; the linter driver does that on the way out.

Output formats
──────────────
  text   ``<filename>:<line>:<column>: <message>``
  json   one JSON object per line (file, line, column, rule, message)
"""

from __future__ import annotations

import json
import sys
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterator, List, Optional, TextIO


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — RULE IDENTIFIERS
# ═════════════════════════════════════════════════════════════════════════

CLOSURE_REQUIRED = "closureRequired"
NAMED_FUNCTION = "namedFunction"
VAR_NOT_FIRST = "varNotFirst"
MULTILINE_VAR = "multilineVar"
EMPTY_STATEMENT = "emptyStatement"

MESSAGES: Dict[str, str] = {
    CLOSURE_REQUIRED: "The script must be inside a closure",
    NAMED_FUNCTION: "Do not declare named functions",
    VAR_NOT_FIRST: "Variable declarations must be at the top of functions",
    MULTILINE_VAR: "Variable declaration spans more than one line",
    EMPTY_STATEMENT: "Empty statement",
}


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — COMPLAINT MODEL
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Complaint:
    """
    A single lint finding.

    Attributes
    ----------
    message  : Human-readable description
    line     : 1-based line of the offending node's start
    column   : 0-based column of the offending node's start
    rule     : Stable rule identifier (e.g. ``"varNotFirst"``)
    filename : Attached by the caller, empty inside the core
    """
    message: str
    line: int
    column: int
    rule: str = ""
    filename: str = ""

    @classmethod
    def for_rule(cls, rule: str, line: int, column: int) -> Complaint:
        """Build a complaint carrying the canonical message for ``rule``."""
        return cls(message=MESSAGES[rule], line=line, column=column, rule=rule)

    def with_filename(self, filename: str) -> Complaint:
        return replace(self, filename=filename)

    def format(self) -> str:
        """``file:line:column: message``"""
        return f"{self.filename}:{self.line}:{self.column}: {self.message}"

    def to_json(self) -> Dict[str, Any]:
        return {
            "file": self.filename,
            "line": self.line,
            "column": self.column,
            "rule": self.rule,
            "message": self.message,
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    def __str__(self) -> str:
        return self.format()


ComplaintSink = Callable[[Complaint], None]

FORMATTERS: Dict[str, Callable[[Complaint], str]] = {
    "text": Complaint.format,
    "json": Complaint.to_json_str,
}


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — SINKS
# ═════════════════════════════════════════════════════════════════════════

class ComplaintCollector:
    """
    Sink that records every complaint in delivery order.

    >>> collector = ComplaintCollector()
    >>> Script(ast).lint(collector)
    >>> collector.messages
    ['Empty statement']
    """

    def __init__(self) -> None:
        self._complaints: List[Complaint] = []
        self._lock = threading.Lock()

    def __call__(self, complaint: Complaint) -> None:
        with self._lock:
            self._complaints.append(complaint)

    def __iter__(self) -> Iterator[Complaint]:
        return iter(list(self._complaints))

    def __len__(self) -> int:
        return len(self._complaints)

    @property
    def complaints(self) -> List[Complaint]:
        return list(self._complaints)

    @property
    def messages(self) -> List[str]:
        return [c.message for c in self._complaints]

    @property
    def rules(self) -> List[str]:
        return [c.rule for c in self._complaints]


class StreamSink:
    """
    Sink that writes one formatted line per complaint, flushing each line.

    Writes are serialized with a lock so complaints delivered from
    several files linted in parallel never interleave mid-line.
    """

    def __init__(self, stream: Optional[TextIO] = None, fmt: str = "text") -> None:
        if fmt not in FORMATTERS:
            raise ValueError(f"unknown output format: {fmt!r}")
        self.stream = stream if stream is not None else sys.stdout
        self.fmt = fmt
        self.count = 0
        self._format = FORMATTERS[fmt]
        self._lock = threading.Lock()

    def __call__(self, complaint: Complaint) -> None:
        line = self._format(complaint)
        with self._lock:
            self.stream.write(line + "\n")
            self.stream.flush()
            self.count += 1


__all__ = [
    "CLOSURE_REQUIRED",
    "NAMED_FUNCTION",
    "VAR_NOT_FIRST",
    "MULTILINE_VAR",
    "EMPTY_STATEMENT",
    "MESSAGES",
    "FORMATTERS",
    "Complaint",
    "ComplaintSink",
    "ComplaintCollector",
    "StreamSink",
]
