#!/usr/bin/env python3
"""jsbastard/main.py — command-line entry point.

Usage examples
--------------
    # Lint a couple of scripts
    jsbastard app.js lib/util.js

    # JSON lines, four files at a time, with progress logging
    jsbastard --format json -j 4 -v src/*.js

Each file is read, parsed and linted independently; a file that cannot be
read or parsed is reported on stderr and the remaining files are still
linted.  Complaints go to stdout, one per line, as they are found.

Exit codes
----------
    0   Every file was linted (complaints or not).
    2   At least one file could not be read or parsed.
    130 Interrupted.

The module doubles as ``python -m jsbastard`` via ``jsbastard/__main__.py``.
"""

from __future__ import annotations

import argparse
import codecs
import logging
import sys
import textwrap
from typing import Optional, Sequence

from jsbastard import __version__
from jsbastard.complaints import FORMATTERS, StreamSink
from jsbastard.linter import Linter, LinterOptions

_log = logging.getLogger("jsbastard")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_INFRA: int = 2
EXIT_INTERRUPTED: int = 130


def _configure_logging(verbosity: int) -> None:
    """Set up the ``jsbastard`` logger on stderr.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("jsbastard")
    for old in list(root.handlers):
        root.removeHandler(old)
    root.setLevel(level)
    root.addHandler(handler)


def _encoding(value: str) -> str:
    try:
        codecs.lookup(value)
    except LookupError:
        raise argparse.ArgumentTypeError(f"unknown encoding: {value}")
    return value


def _jobs(value: str) -> int:
    try:
        jobs = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value}")
    if jobs < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return jobs


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsbastard",
        description=(
            "Structural style checker for JavaScript scripts: closure\n"
            "wrapping, no named functions, var statements first and on\n"
            "one line, no empty statements."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              jsbastard app.js
              jsbastard --format json -j 4 src/*.js
        """),
    )
    parser.add_argument("files", nargs="+", metavar="FILE", help="Script files to lint.")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default="text",
        help="Complaint output format (default: text).",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=_jobs,
        default=1,
        help="Number of files to lint in parallel (default: 1).",
    )
    parser.add_argument(
        "--encoding",
        type=_encoding,
        default="utf-8",
        help="Source file encoding (default: utf-8).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the jsbastard CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    linter = Linter(LinterOptions(encoding=args.encoding, jobs=args.jobs))
    sink = StreamSink(sys.stdout, fmt=args.format)

    try:
        report = linter.lint_files(args.files, sink)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return EXIT_INTERRUPTED

    _log.info("%s", report.summary())
    return EXIT_OK if report.ok else EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
