"""Command-line switches for the log channels."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields
from typing import Sequence

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass(frozen=True)
class LogSwitches:
    """Channel switches and presentation settings, fixed at startup."""

    info: bool = True
    debug: bool = False
    error: bool = True
    request: bool = False
    response: bool = False
    verbose: bool = False  # read by callers, not by the channels
    colorize: bool = False


# (flag, LogSwitches field, help)
LOG_FLAGS = (
    ("-info", "info", "info log"),
    ("-debug", "debug", "debug log"),
    ("-err", "error", "error log"),
    ("-request", "request", "request log"),
    ("-reply", "response", "reply log"),
    ("-v", "verbose", "more info in request/response logging"),
    ("-color", "colorize", "colorize log output"),
)


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value the way Go's flag package does."""
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value {value!r}")


def add_log_flags(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Register the log flags on an existing parser.

    Each flag is accepted with one or two dashes. A bare flag turns the
    switch on; ``-flag=false`` turns it off. A value given as a separate
    word (``-flag false``) is also taken as the flag's value.
    """
    defaults = LogSwitches()
    group = parser.add_argument_group("logging")
    for flag, dest, help_text in LOG_FLAGS:
        group.add_argument(
            flag,
            f"-{flag}",
            dest=dest,
            nargs="?",
            const=True,
            default=getattr(defaults, dest),
            type=parse_bool,
            metavar="BOOL",
            help=help_text,
        )
    return parser


def switches_from_args(args: argparse.Namespace) -> LogSwitches:
    """Build LogSwitches from parsed arguments, falling back to defaults."""
    defaults = LogSwitches()
    values = {
        field.name: bool(getattr(args, field.name, getattr(defaults, field.name)))
        for field in fields(LogSwitches)
    }
    return LogSwitches(**values)


def parse_log_flags(argv: Sequence[str] | None = None) -> LogSwitches:
    """Parse only the log flags from ``argv``."""
    parser = argparse.ArgumentParser(allow_abbrev=False)
    add_log_flags(parser)
    return switches_from_args(parser.parse_args(argv))
