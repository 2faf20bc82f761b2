"""Utilities for coordinating sinklog tests."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, List

from sinklog.metrics import get_metrics, reset_metrics
from sinklog.sinks.file import FileSink


class CountingSink:
    """Instrumented sink recording every attempt, optionally failing."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls = 0
        self.records: List[str] = []

    def emit(self, text: str, file_path: str) -> None:
        self.calls += 1
        if self.fail:
            raise OSError("sink unavailable")
        self.records.append(text)


class CountingFileSink(FileSink):
    """File sink that counts attempts and can be forced to fail."""

    def __init__(self, *, fail: bool = False) -> None:
        super().__init__()
        self.fail = fail
        self.calls = 0

    def emit(self, text: str, file_path: str) -> None:
        self.calls += 1
        if self.fail:
            raise PermissionError(f"cannot write {file_path}")
        super().emit(text, file_path)


def reset_logging_metrics() -> None:
    """Reset logging metrics between tests."""

    reset_metrics()


@contextmanager
def capture_logging_metrics(reset_on_exit: bool = True) -> Iterator[Callable[[], dict[str, Any]]]:
    """Track logging metrics and expose a callable returning the latest snapshot."""

    def snapshot() -> dict[str, Any]:
        return get_metrics().as_dict()

    try:
        yield snapshot
    finally:
        if reset_on_exit:
            reset_logging_metrics()
