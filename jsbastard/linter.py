"""
jsbastard/linter.py
═══════════════════

File-level driver around the rule engine.

Each file goes through the same pipeline, independently of the others:

    read  ──►  parse (esprima)  ──►  Script.lint  ──►  sink

A file that cannot be read or parsed is logged and skipped; the rule
engine is never invoked for it.  Files share no state, so with
``jobs > 1`` they are linted on a thread pool and only the sink sees
interleaved delivery.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from jsbastard.complaints import Complaint, ComplaintCollector, ComplaintSink
from jsbastard.context import Context
from jsbastard.errors import ParseError, ReadError
from jsbastard.parser import parse_source
from jsbastard.rules import RuleRegistry, Script

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class LinterOptions:
    """
    Attributes
    ----------
    encoding : Text encoding used to read source files
    jobs     : Number of files linted concurrently (1 = sequential)
    """
    encoding: str = "utf-8"
    jobs: int = 1


@dataclass
class LintReport:
    """Outcome of linting a batch of files."""
    files_checked: int = 0
    failed: List[str] = field(default_factory=list)
    complaint_count: int = 0

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        return (
            f"{self.files_checked} file(s) checked, "
            f"{self.complaint_count} complaint(s), "
            f"{len(self.failed)} file(s) skipped"
        )


class _CountingSink:
    def __init__(self, sink: ComplaintSink) -> None:
        self.sink = sink
        self.count = 0

    def __call__(self, complaint: Complaint) -> None:
        self.count += 1
        self.sink(complaint)


class Linter:
    """
    Reads, parses and lints script files.

    >>> linter = Linter(LinterOptions(jobs=4))
    >>> report = linter.lint_files(["a.js", "b.js"], StreamSink())
    >>> report.ok
    True
    """

    def __init__(
        self,
        options: Optional[LinterOptions] = None,
        registry: Optional[RuleRegistry] = None,
    ) -> None:
        self.options = options or LinterOptions()
        self.registry = registry

    def read_source(self, path: PathLike) -> str:
        try:
            return Path(path).read_text(encoding=self.options.encoding)
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            raise ReadError(str(exc), filename=str(path), cause=exc) from exc

    def lint_ast(self, ast: Any, sink: ComplaintSink, filename: str = "") -> None:
        """Run the rules over ``ast``, tagging complaints with ``filename``."""

        def complain(complaint: Complaint) -> None:
            sink(complaint.with_filename(filename))

        Script(ast, self.registry).lint(complain, Context())

    def lint_source(self, source: str, sink: ComplaintSink, filename: str = "<string>") -> None:
        ast = parse_source(source, filename)
        self.lint_ast(ast, sink, filename)

    def lint_file(self, path: PathLike, sink: ComplaintSink) -> bool:
        """Lint one file; returns False when it had to be skipped."""
        filename = str(path)
        try:
            source = self.read_source(path)
        except ReadError as exc:
            logger.error("Could not read %s", filename)
            logger.info("%s", exc.cause)
            return False
        try:
            self.lint_source(source, sink, filename)
        except ParseError as exc:
            logger.error("Could not parse %s: %s", filename, exc.description)
            return False
        logger.debug("Linted %s", filename)
        return True

    def lint_files(self, paths: Sequence[PathLike], sink: ComplaintSink) -> LintReport:
        """Lint every path independently and summarize the batch."""
        sinks = [_CountingSink(sink) for _ in paths]
        outcome: Dict[int, bool] = {}

        if self.options.jobs <= 1 or len(paths) <= 1:
            for index, path in enumerate(paths):
                outcome[index] = self.lint_file(path, sinks[index])
        else:
            workers = min(self.options.jobs, len(paths))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                future_to_index = {
                    executor.submit(self.lint_file, path, sinks[index]): index
                    for index, path in enumerate(paths)
                }
                for future in as_completed(future_to_index):
                    outcome[future_to_index[future]] = future.result()

        return LintReport(
            files_checked=len(paths),
            failed=[str(path) for index, path in enumerate(paths) if not outcome[index]],
            complaint_count=sum(s.count for s in sinks),
        )


def lint_string(
    source: str,
    filename: str = "<string>",
    registry: Optional[RuleRegistry] = None,
) -> List[Complaint]:
    """Lint ``source`` and return the complaints in discovery order."""
    collector = ComplaintCollector()
    Linter(registry=registry).lint_source(source, collector, filename)
    return collector.complaints


__all__ = [
    "LinterOptions",
    "LintReport",
    "Linter",
    "lint_string",
]
