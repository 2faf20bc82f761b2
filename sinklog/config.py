"""Configuration utilities for the sinklog runtime."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .errors import ArgumentError, FormatError, SettingsError
from .formatting import probe_message, probe_path
from .schema import (
    DEFAULT_FILE_PATH_FORMAT,
    DEFAULT_MESSAGE_DETAILS_FORMAT,
    DEFAULT_MESSAGE_FORMAT,
)


def _bool_env(value: str | None, default: bool) -> bool:
    """Convert a string to a boolean."""

    if value is None:
        return default

    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(value: str | None, default: str) -> str:
    if value is None or not value.strip():
        return default

    return value


@dataclass(frozen=True)
class LogSettings:
    """Immutable snapshot of a logger's configuration."""

    file_path_format: str = DEFAULT_FILE_PATH_FORMAT
    message_format: str = DEFAULT_MESSAGE_FORMAT
    message_details_format: str = DEFAULT_MESSAGE_DETAILS_FORMAT
    write_to_custom: bool = True
    write_to_console: bool = True
    write_to_file: bool = True
    allow_write_null_messages: bool = False
    ignore_write_exceptions: bool = False
    auto_disable_write_outputs: bool = False

    def with_overrides(self, **kwargs: Any) -> "LogSettings":
        return replace(self, **kwargs)


SETTING_NAMES = frozenset(field.name for field in fields(LogSettings))
TEMPLATE_SETTINGS = frozenset(
    {"file_path_format", "message_format", "message_details_format"}
)


def _probe_template(name: str, template: Any) -> str:
    if not isinstance(template, str):
        raise SettingsError(f"{name} must be a string, got {type(template).__name__}")

    try:
        if name == "file_path_format":
            return probe_path(template)
        return probe_message(template, with_details=name == "message_details_format")
    except FormatError as exc:
        raise SettingsError(f"invalid {name} {template!r}: {exc}") from exc


def validate_settings(settings: LogSettings) -> LogSettings:
    """Reject ``None`` values, non-bool flags and templates that do not render."""

    for name in sorted(SETTING_NAMES):
        value = getattr(settings, name)

        if value is None:
            raise ArgumentError(name)

        if name in TEMPLATE_SETTINGS:
            _probe_template(name, value)
        elif not isinstance(value, bool):
            raise SettingsError(f"{name} must be a bool, got {type(value).__name__}")

    return settings


_SETTINGS_LOCK = threading.RLock()
_SETTINGS: LogSettings | None = None


def load_settings(env: Mapping[str, str] | None = None) -> LogSettings:
    """Build settings from ``env`` (defaults to ``os.environ``)."""

    source = os.environ if env is None else env

    return LogSettings(
        file_path_format=_str_env(
            source.get("LOG_FILE_PATH_FORMAT"), DEFAULT_FILE_PATH_FORMAT
        ),
        message_format=_str_env(
            source.get("LOG_MESSAGE_FORMAT"), DEFAULT_MESSAGE_FORMAT
        ),
        message_details_format=_str_env(
            source.get("LOG_MESSAGE_DETAILS_FORMAT"), DEFAULT_MESSAGE_DETAILS_FORMAT
        ),
        write_to_custom=_bool_env(source.get("LOG_WRITE_TO_CUSTOM"), True),
        write_to_console=_bool_env(source.get("LOG_WRITE_TO_CONSOLE"), True),
        write_to_file=_bool_env(source.get("LOG_WRITE_TO_FILE"), True),
        allow_write_null_messages=_bool_env(
            source.get("LOG_ALLOW_NULL_MESSAGES"), False
        ),
        ignore_write_exceptions=_bool_env(
            source.get("LOG_IGNORE_WRITE_EXCEPTIONS"), False
        ),
        auto_disable_write_outputs=_bool_env(
            source.get("LOG_AUTO_DISABLE_OUTPUTS"), False
        ),
    )


def configure_settings(
    settings: LogSettings | None = None, **overrides: Any
) -> LogSettings:
    with _SETTINGS_LOCK:
        resolved = settings or load_settings()
        if overrides:
            resolved = resolved.with_overrides(**overrides)
        validate_settings(resolved)
        global _SETTINGS
        _SETTINGS = resolved
        return _SETTINGS


def get_settings() -> LogSettings:
    with _SETTINGS_LOCK:
        if _SETTINGS is None:
            return configure_settings()
        return _SETTINGS


def reset_settings() -> None:
    global _SETTINGS

    with _SETTINGS_LOCK:
        _SETTINGS = None
