"""Log channels: one switch, one prefix and one destination per category."""

from __future__ import annotations

import logging
from typing import Any

# 2009/01/23 01:23:23
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
LINE_FORMAT = "%(asctime)s %(filename)s:%(lineno)d: %(message)s"


class ChannelFormatter(logging.Formatter):
    """Render ``<prefix><timestamp> <file>:<line>: <message>`` lines.

    With ``with_metadata=False`` only the bare message is rendered.
    """

    def __init__(self, prefix: str = "", *, with_metadata: bool = True) -> None:
        fmt = LINE_FORMAT if with_metadata else "%(message)s"
        super().__init__(prefix.replace("%", "%%") + fmt, datefmt=DATE_FORMAT)
        self.prefix = prefix
        self.with_metadata = with_metadata

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        # The handler terminates the line
        if text.endswith("\n"):
            text = text[:-1]
        return text


class Channel:
    """A named log category guarded by an on/off switch.

    Disabled channels return before any formatting or I/O happens, so
    ``printf`` with arguments that would not format is still harmless.
    ``bool(channel)`` is the switch, for guarding expensive argument
    construction at the call site.
    """

    def __init__(
        self,
        name: str,
        enabled: bool,
        logger: logging.Logger,
        level: int = logging.INFO,
    ) -> None:
        self.name = name
        self._enabled = enabled
        self.logger = logger
        self.level = level

    @property
    def enabled(self) -> bool:
        """The switch, fixed when the channel is built."""
        return self._enabled

    def __bool__(self) -> bool:
        return self._enabled

    def __repr__(self) -> str:
        state = "on" if self.enabled else "off"
        return f"<Channel {self.name} {state}>"

    def printf(self, format: str, *args: Any) -> None:
        if self.enabled:
            self.output(2, format, *args)

    def println(self, *args: Any) -> None:
        if self.enabled:
            self.output(2, " ".join(str(arg) for arg in args))

    def output(self, calldepth: int, msg: str, *args: Any) -> None:
        """Write one line attributed to the frame ``calldepth`` levels up.

        A calldepth of 1 reports the caller of ``output``. ``printf`` and
        ``println`` pass 2 so the line points at whoever called them; a helper
        wrapping a channel must add one per frame it introduces.
        """
        if not self.enabled:
            return
        self.logger.log(self.level, msg, *args, stacklevel=calldepth + 1)


class HistoryChannel:
    """Append-only record of handled requests, written regardless of switches."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def write(self, msg: str, *args: Any) -> None:
        self.logger.log(logging.INFO, msg, *args)
