"""Public API for the sinklog multi-sink logger."""

from __future__ import annotations

from .config import LogSettings, configure_settings, get_settings, load_settings
from .errors import (
    ArgumentError,
    FormatError,
    LogError,
    SettingsError,
    SinkError,
    WriteError,
)
from .formatting import expand_escapes, render_message, render_path
from .logger import Log, configure_default_log, get_default_log, reset_default_log
from .metrics import get_metrics
from .schema import NULL_PLACEHOLDER, Outputs, Sender
from .sinks import ConsoleSink, CustomSink, FileSink, InMemorySink

__all__ = [
    "configure",
    "Log",
    "LogSettings",
    "load_settings",
    "get_settings",
    "get_default_log",
    "reset_default_log",
    "get_metrics",
    "Sender",
    "Outputs",
    "NULL_PLACEHOLDER",
    "render_message",
    "render_path",
    "expand_escapes",
    "ConsoleSink",
    "CustomSink",
    "FileSink",
    "InMemorySink",
    "LogError",
    "ArgumentError",
    "SettingsError",
    "FormatError",
    "SinkError",
    "WriteError",
]


def configure(settings: LogSettings | None = None, **overrides) -> LogSettings:
    """Install process-wide settings and rebuild the default logger."""

    resolved = configure_settings(settings, **overrides)
    configure_default_log(resolved)

    return resolved
