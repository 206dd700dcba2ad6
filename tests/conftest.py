"""Pytest configuration and fixtures for testing."""

from __future__ import annotations

from typing import Callable, Generator

import pytest

from proxylog.logging import LogSwitches, ProxyLog, reset_logging


@pytest.fixture(autouse=True)
def clean_log_handlers() -> Generator[None, None, None]:
    """Drop proxylog handlers around every test.

    Handlers bound to a previous test's captured stdout would otherwise
    linger on the process-wide loggers.
    """
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def make_log() -> Generator[Callable[..., ProxyLog], None, None]:
    """Build ProxyLog instances and close their files after the test.

    Usage:
        def test_something(make_log):
            log = make_log(LogSwitches(debug=True))
    """
    created: list[ProxyLog] = []

    def factory(switches: LogSwitches | None = None) -> ProxyLog:
        log = ProxyLog(switches)
        created.append(log)
        return log

    yield factory

    for log in created:
        log.close()
