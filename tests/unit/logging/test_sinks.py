"""Tests for the custom, console, file and in-memory sinks."""

from __future__ import annotations

import io
from typing import List

import pytest

from sinklog.errors import ArgumentError, SinkError
from sinklog.sinks import ConsoleSink, CustomSink, FileSink, InMemorySink


def test_custom_sink_invokes_callbacks_in_registration_order():
    sink = CustomSink()
    calls: List[str] = []

    sink.register(lambda text: calls.append(f"first:{text}"))
    sink.register(lambda text: calls.append(f"second:{text}"))

    sink.emit("hello", "ignored.txt")

    assert calls == ["first:hello", "second:hello"]


def test_custom_sink_runs_later_callbacks_after_failure():
    """One failing subscriber does not block the subscribers after it."""

    sink = CustomSink()
    received: List[str] = []

    def _broken(text: str) -> None:
        raise RuntimeError("subscriber failure")

    sink.register(_broken)
    sink.register(received.append)

    with pytest.raises(SinkError) as excinfo:
        sink.emit("payload", "ignored.txt")

    assert received == ["payload"]
    assert len(excinfo.value.causes) == 1
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_custom_sink_register_is_idempotent_and_unregister_reports_membership():
    sink = CustomSink()
    memory = InMemorySink()

    sink.register(memory)
    sink.register(memory)
    assert len(sink) == 1

    assert sink.unregister(memory) is True
    assert sink.unregister(memory) is False
    assert sink.callbacks == ()


def test_custom_sink_rejects_none_callback():
    sink = CustomSink()

    with pytest.raises(ArgumentError):
        sink.register(None)

    with pytest.raises(ArgumentError):
        sink.unregister(None)


def test_custom_sink_without_subscribers_is_a_no_op():
    CustomSink().emit("nobody listens", "ignored.txt")


def test_console_sink_writes_to_stream():
    stream = io.StringIO()

    ConsoleSink(stream).emit("console line\n", "ignored.txt")

    assert stream.getvalue() == "console line\n"


def test_console_sink_defaults_to_stdout(capsys):
    ConsoleSink().emit("to stdout\n", "ignored.txt")

    assert capsys.readouterr().out == "to stdout\n"


def test_console_sink_propagates_stream_errors():
    stream = io.StringIO()
    stream.close()

    with pytest.raises(ValueError):
        ConsoleSink(stream).emit("closed", "ignored.txt")


def test_file_sink_creates_directories_and_appends(tmp_path):
    target = tmp_path / "deep" / "er" / "log.txt"
    sink = FileSink()

    sink.emit("one\n", str(target))
    sink.emit("two\n", str(target))

    assert target.read_text(encoding="utf-8") == "one\ntwo\n"


def test_file_sink_fails_when_parent_is_a_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")

    with pytest.raises(OSError):
        FileSink().emit("text", str(blocker / "log.txt"))


def test_in_memory_sink_accepts_emit_and_callback_usage():
    sink = InMemorySink()

    sink("from callback")
    sink.emit("from dispatcher", "ignored.txt")

    assert sink.records == ["from callback", "from dispatcher"]
