"""Fixtures for sinklog unit tests."""

from __future__ import annotations

import datetime as dt
import io

import pytest

from sinklog.config import LogSettings, reset_settings
from sinklog.logger import Log, reset_default_log
from sinklog.sinks.console import ConsoleSink
from sinklog.sinks.memory import InMemorySink

from tests.utils.logging import reset_logging_metrics


def pytest_collection_modifyitems(config, items):  # pragma: no cover - Pytest hook
    """Tag every test in this directory with the `logging` marker."""

    for item in items:
        item.add_marker(pytest.mark.logging)


@pytest.fixture(autouse=True)
def _reset_logging_state():
    """Reset sinklog globals (default log, settings, metrics) around each test."""

    reset_default_log()
    reset_settings()
    reset_logging_metrics()
    yield
    reset_logging_metrics()
    reset_settings()
    reset_default_log()


@pytest.fixture
def fixed_time() -> dt.datetime:
    return dt.datetime(2024, 1, 1, 0, 0, 0)


@pytest.fixture
def log_path_format(tmp_path) -> str:
    """Path template rooted in the test's temporary directory."""

    return str(tmp_path / "logs" / "log_{0:%Y-%m-%d}.txt")


@pytest.fixture
def console_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def log_settings(log_path_format) -> LogSettings:
    return LogSettings(file_path_format=log_path_format)


@pytest.fixture
def log(log_settings, console_stream) -> Log:
    """Logger writing to a captured console stream and a temporary directory."""

    return Log(log_settings, console_sink=ConsoleSink(console_stream))


@pytest.fixture
def memory_sink(log) -> InMemorySink:
    """In-memory subscriber registered on the logger's custom output."""

    sink = InMemorySink()
    log.register(sink)

    return sink
