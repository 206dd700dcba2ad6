"""Process entry point: flags, config, then logging setup."""

from __future__ import annotations

import argparse
from typing import Sequence

from .config_loader import get_log_paths, load_config
from .exceptions import ConfigurationError
from .logging import ProxyLog, add_log_flags, fatal, switches_from_args


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proxylog",
        description="Proxy logging bootstrap",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-rc",
        dest="config",
        help="config file (default: PROXYLOG_CONFIG or configs/config_default.yaml)",
    )
    add_log_flags(parser)
    return parser


def init_log(argv: Sequence[str] | None = None) -> ProxyLog:
    """Parse flags, load the config and return a configured ProxyLog.

    A missing history file (or an unreadable config) aborts the process with
    exit status 1; this is the only place that decision is made.
    """
    args = build_parser().parse_args(argv)
    switches = switches_from_args(args)
    try:
        paths = get_log_paths(load_config(args.config))
        log = ProxyLog(switches)
        log.configure(paths.log_file, paths.history_file)
    except ConfigurationError as exc:
        fatal(exc)
    return log


def main(argv: Sequence[str] | None = None) -> int:
    log = init_log(argv)
    log.info.println("started")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
