"""Logging configuration for the proxy.

``ProxyLog`` owns the five switchable channels and the history channel. A
fresh instance writes everything to stdout with plain prefixes, so it is safe
to use before the configuration is known; ``configure`` then moves the
channels to their real destinations.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, NoReturn, TextIO

from colorama import Fore, Style, just_fix_windows_console

from ..exceptions import ConfigurationError
from .channel import Channel, ChannelFormatter, HistoryChannel
from .flags import LogSwitches

DEFAULT_LOGGER_NAME = "proxylog"
LOG_FILE_MODE = 0o600

# (channel, prefix, prefix color)
PREFIXED_CHANNELS = (
    ("error", "[ERROR] ", Fore.RED),
    ("debug", "[DEBUG] ", Fore.BLUE),
    ("request", "[>>>>>] ", Fore.GREEN),
    ("response", "[<<<<<] ", Fore.YELLOW),
)


def _channel_logger(name: str) -> logging.Logger:
    """A logger private to one ProxyLog, kept out of the logging registry.

    Registered names are process-wide, so two facades sharing them would
    rebind each other's sinks.
    """
    logger = logging.Logger(f"{DEFAULT_LOGGER_NAME}.{name}")
    logger.propagate = False
    return logger


def open_log_file(path: str | os.PathLike[str]) -> TextIO:
    """Open ``path`` for appending, creating it readable by the owner only."""
    fd = os.open(
        Path(path).expanduser(),
        os.O_CREAT | os.O_WRONLY | os.O_APPEND,
        LOG_FILE_MODE,
    )
    return os.fdopen(fd, "a", encoding="utf-8")


def colorize_prefix(prefix: str, color: str) -> str:
    return f"{color}{prefix}{Style.RESET_ALL}"


def _bind(logger: logging.Logger, stream: TextIO, formatter: logging.Formatter, level: int) -> None:
    """Point ``logger`` at ``stream``, replacing whatever handler it had."""
    logger.handlers.clear()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


class ProxyLog:
    """Facade over the proxy's log channels.

    Attributes:
        info, debug, error, request, response: switchable ``Channel`` objects.
        history: the unconditional ``HistoryChannel``.
        log_file: stream the regular channels write to.
        history_file: stream the history channel writes to.
        configured: whether ``configure`` has completed.
    """

    def __init__(self, switches: LogSwitches | None = None) -> None:
        self.switches = switches or LogSwitches()
        self.configured = False
        self.log_file: TextIO = sys.stdout
        self.history_file: TextIO = sys.stdout
        self._opened: list[TextIO] = []
        self._default_handler: logging.Handler | None = None

        self.info = Channel(
            "info", self.switches.info, _channel_logger("info"), logging.INFO
        )
        self.error = Channel(
            "error", self.switches.error, _channel_logger("error"), logging.ERROR
        )
        self.debug = Channel(
            "debug", self.switches.debug, _channel_logger("debug"), logging.DEBUG
        )
        self.request = Channel(
            "request", self.switches.request, _channel_logger("request"), logging.DEBUG
        )
        self.response = Channel(
            "response", self.switches.response, _channel_logger("response"), logging.DEBUG
        )
        self.history = HistoryChannel(_channel_logger("history"))

        self._rebuild(colorize=False)

    @property
    def verbose(self) -> bool:
        return self.switches.verbose

    @property
    def colorize(self) -> bool:
        return self.switches.colorize

    def configure(self, log_file: str | None, history_file: str | None) -> "ProxyLog":
        """Resolve destinations and rebuild every channel sink.

        Args:
            log_file: Path of the general log; empty or None logs to stdout.
            history_file: Path of the history log. Required.

        Returns:
            This instance, now configured.

        Raises:
            ConfigurationError: If no history file is configured. Nothing has
                been opened or written when this is raised.
        """
        if not history_file:
            raise ConfigurationError("history file is not configured")

        previously_opened = self._opened
        self._opened = []

        log_stream: TextIO = sys.stdout
        if log_file:
            log_stream = self._open_or_stdout(log_file, "log")
        history_stream = self._open_or_stdout(history_file, "history")

        self.log_file = log_stream
        self.history_file = history_stream

        if self.switches.colorize:
            just_fix_windows_console()
        self._rebuild(colorize=self.switches.colorize)
        self._redirect_default_logger()

        for stream in previously_opened:
            stream.close()
        self.configured = True
        return self

    def close(self) -> None:
        """Close the files opened by ``configure`` and fall back to stdout.

        The shared ``proxylog`` logger is released only if this instance is
        still the one it points at.
        """
        opened, self._opened = self._opened, []
        self.log_file = sys.stdout
        self.history_file = sys.stdout
        self._rebuild(colorize=False)
        default_logger = logging.getLogger(DEFAULT_LOGGER_NAME)
        if self._default_handler in default_logger.handlers:
            default_logger.removeHandler(self._default_handler)
        self._default_handler = None
        for stream in opened:
            stream.close()
        self.configured = False

    def _redirect_default_logger(self) -> None:
        # Any module-level logging.getLogger("proxylog") use elsewhere in the
        # proxy lands in the general log too.
        default_logger = logging.getLogger(DEFAULT_LOGGER_NAME)
        _bind(default_logger, self.log_file, ChannelFormatter(), logging.INFO)
        self._default_handler = default_logger.handlers[0]

    def _open_or_stdout(self, path: str, kind: str) -> TextIO:
        try:
            stream = open_log_file(path)
        except OSError as exc:
            # Reported directly: the channels are not usable yet
            print(f"Can't open {kind} file, logging to stdout: {exc}")
            return sys.stdout
        self._opened.append(stream)
        return stream

    def _rebuild(self, colorize: bool) -> None:
        _bind(self.info.logger, self.log_file, ChannelFormatter(), logging.INFO)
        for name, prefix, color in PREFIXED_CHANNELS:
            if colorize:
                prefix = colorize_prefix(prefix, color)
            channel = getattr(self, name)
            _bind(channel.logger, self.log_file, ChannelFormatter(prefix), logging.DEBUG)
        _bind(
            self.history.logger,
            self.history_file,
            ChannelFormatter(with_metadata=False),
            logging.DEBUG,
        )


def reset_logging() -> None:
    """Drop every handler from the shared proxylog logger (for testing)."""
    logging.getLogger(DEFAULT_LOGGER_NAME).handlers.clear()


def fatal(*args: Any) -> NoReturn:
    print(*args)
    raise SystemExit(1)


def fatalf(format: str, *args: Any) -> NoReturn:
    print(format % args if args else format, end="")
    raise SystemExit(1)
