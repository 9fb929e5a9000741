# jsbastard/errors.py
"""
Exception types for the jsbastard boundary layer.

Error Hierarchy
───────────────
    JsBastardError (base)
    └── AcquisitionError     - the file could not be turned into an AST
        ├── ReadError        - unreadable or undecodable file
        └── ParseError       - esprima rejected the source

The rule engine itself never raises: unhandled node shapes are logged and
skipped, and complaints are delivered to a sink rather than thrown.  These
exceptions only travel between the parser adapter, the linter driver and
the command-line entry point.
"""

from __future__ import annotations

from typing import Optional


class JsBastardError(Exception):
    """Base exception for all jsbastard errors."""

    def __init__(self, message: str, filename: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}: {self.message}"
        return self.message


class AcquisitionError(JsBastardError):
    """A file could not be read or parsed; it is skipped entirely."""


class ReadError(AcquisitionError):
    """The file could not be read or decoded."""

    def __init__(
        self,
        message: str,
        filename: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, filename)
        self.cause = cause


class ParseError(AcquisitionError):
    """The parser rejected the source text."""

    def __init__(
        self,
        message: str,
        filename: str = "",
        line: int = 0,
        column: int = 0,
    ) -> None:
        super().__init__(message, filename)
        self.line = line
        self.column = column

    @property
    def description(self) -> str:
        return self.message

    def __str__(self) -> str:
        if self.line:
            return f"{self.filename or '<string>'}:{self.line}:{self.column}: {self.message}"
        return super().__str__()


__all__ = [
    "JsBastardError",
    "AcquisitionError",
    "ReadError",
    "ParseError",
]
