"""Logging module for the proxy."""

from .channel import Channel, ChannelFormatter, HistoryChannel
from .flags import LogSwitches, add_log_flags, parse_log_flags, switches_from_args
from .setup import ProxyLog, fatal, fatalf, open_log_file, reset_logging

__all__ = [
    "ProxyLog",
    "Channel",
    "ChannelFormatter",
    "HistoryChannel",
    "LogSwitches",
    "add_log_flags",
    "parse_log_flags",
    "switches_from_args",
    "open_log_file",
    "reset_logging",
    "fatal",
    "fatalf",
]
