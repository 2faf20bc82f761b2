"""Thread-safe multi-sink logger."""

from __future__ import annotations

import datetime as _dt
import logging
import threading
from dataclasses import replace
from typing import Any, Callable, Dict

from .config import (
    SETTING_NAMES,
    LogSettings,
    get_settings,
    validate_settings,
)
from .dispatcher import Dispatcher, Sink
from .errors import ArgumentError, SettingsError, WriteError
from .formatting import probe_path, render_message, render_path
from .metrics import record_auto_disable, record_suppressed
from .schema import NULL_PLACEHOLDER, OUTPUT_ORDER, Outputs, Sender
from .sinks.console import ConsoleSink
from .sinks.custom import CustomSink
from .sinks.file import FileSink

logger = logging.getLogger(__name__)

_ENABLE_FIELDS: Dict[Outputs, str] = {
    Outputs.CUSTOM: "write_to_custom",
    Outputs.CONSOLE: "write_to_console",
    Outputs.FILE: "write_to_file",
}

_NO_DETAILS = object()


def _enabled_outputs(settings: LogSettings) -> Outputs:
    enabled = Outputs.NONE

    for output, name in _ENABLE_FIELDS.items():
        if getattr(settings, name):
            enabled |= output

    return enabled


def _setting(name: str, doc: str) -> property:
    def getter(self: "Log") -> Any:
        with self._lock:
            return getattr(self._settings, name)

    def setter(self: "Log", value: Any) -> None:
        self.configure(**{name: value})

    return property(getter, setter, doc=doc)


class Log:
    """Render log events and fan them out to custom, console and file sinks.

    All configuration reads, updates and writes on one instance are
    serialized by a single re-entrant lock, so every write observes one
    consistent settings snapshot.

    Sink failures are aggregated into a single :class:`WriteError` carrying
    the failed :class:`Outputs`; ``ignore_write_exceptions`` suppresses it and
    ``auto_disable_write_outputs`` switches failing sinks off for good.
    """

    def __init__(
        self,
        settings: LogSettings | None = None,
        *,
        console_sink: Sink | None = None,
        file_sink: FileSink | None = None,
    ) -> None:
        """Initialize the logger; templates in ``settings`` are probe-rendered."""

        resolved = settings if settings is not None else LogSettings()
        validate_settings(resolved)

        self._lock = threading.RLock() # Guards settings and dispatch
        self._settings = resolved # The settings snapshot in effect
        self._custom = CustomSink() # The in-process subscribers
        self._file = file_sink if file_sink is not None else FileSink()
        self._dispatcher = Dispatcher(
            {
                Outputs.CUSTOM: self._custom,
                Outputs.CONSOLE: console_sink if console_sink is not None else ConsoleSink(),
                Outputs.FILE: self._file,
            }
        )

    # --------------------- configuration ---------------------
    write_to_custom = _setting("write_to_custom", "Deliver to registered callbacks.")
    write_to_console = _setting("write_to_console", "Deliver to the console stream.")
    write_to_file = _setting("write_to_file", "Append to the resolved log file.")
    allow_write_null_messages = _setting(
        "allow_write_null_messages",
        f"Substitute {NULL_PLACEHOLDER!r} for a missing message or details.",
    )
    ignore_write_exceptions = _setting(
        "ignore_write_exceptions", "Swallow sink failures instead of raising WriteError."
    )
    auto_disable_write_outputs = _setting(
        "auto_disable_write_outputs", "Switch a sink off after it fails."
    )
    file_path_format = _setting(
        "file_path_format", "Path template consuming one timestamp argument."
    )
    message_format = _setting(
        "message_format", "Template consuming (sender, timestamp, message)."
    )
    message_details_format = _setting(
        "message_details_format",
        "Template consuming (sender, timestamp, message, details).",
    )

    @property
    def settings(self) -> LogSettings:
        """Return the settings snapshot currently in effect."""

        with self._lock:
            return self._settings

    @property
    def enabled_outputs(self) -> Outputs:
        with self._lock:
            return _enabled_outputs(self._settings)

    def configure(self, **overrides: Any) -> LogSettings:
        """Validate and atomically commit one or more settings.

        Nothing is committed unless every override passes validation. A new
        ``file_path_format`` must render and resolve to a path that can be
        opened for appending.
        """

        unknown = set(overrides) - SETTING_NAMES
        if unknown:
            raise SettingsError(f"Unknown log settings: {sorted(unknown)}")

        for name, value in overrides.items():
            if value is None:
                raise ArgumentError(name)

        with self._lock:
            candidate = validate_settings(replace(self._settings, **overrides))

            if "file_path_format" in overrides:
                rendered = probe_path(candidate.file_path_format)

                try:
                    self._file.check_writable(rendered)
                except OSError as exc:
                    raise SettingsError(
                        f"file_path_format resolves to unwritable path {rendered!r}: {exc}"
                    ) from exc

            self._settings = candidate

            return self._settings

    # --------------------- custom subscribers ---------------------
    def register(self, callback: Callable[[str], None]) -> None:
        """Subscribe ``callback`` to every rendered message."""

        self._custom.register(callback)

    def unregister(self, callback: Callable[[str], None]) -> bool:
        return self._custom.unregister(callback)

    # --------------------- rendering ---------------------
    def get_file_path(self, timestamp: _dt.datetime | None = None) -> str:
        """Resolve the log file path for ``timestamp`` (now when omitted)."""

        with self._lock:
            return render_path(self._settings.file_path_format, timestamp or _dt.datetime.now())

    def get_message(
        self,
        sender: Sender | str,
        timestamp: _dt.datetime,
        message: str | None,
        details: Any = _NO_DETAILS,
    ) -> str:
        """Render a message with the live templates without writing it."""

        with self._lock:
            return self._render(self._settings, sender, timestamp, message, details)

    # --------------------- writes ---------------------
    def write(
        self,
        message: str | None,
        sender: Sender | str = Sender.LOG,
        *,
        timestamp: _dt.datetime | None = None,
    ) -> Outputs:
        """Render and dispatch ``message``.

        Returns the failed outputs, which is ``Outputs.NONE`` on full success
        and can only be non-empty when ``ignore_write_exceptions`` is set.
        """

        return self._write(sender, timestamp, message, _NO_DETAILS)

    def write_details(
        self,
        message: str | None,
        details: str | None,
        sender: Sender | str = Sender.LOG,
        *,
        timestamp: _dt.datetime | None = None,
    ) -> Outputs:
        """Render ``message`` with ``details`` through the details template."""

        return self._write(sender, timestamp, message, details)

    def write_custom_log_message(
        self,
        text: str | None,
        *,
        timestamp: _dt.datetime | None = None,
    ) -> Outputs:
        """Dispatch pre-rendered ``text`` without applying a message template."""

        with self._lock:
            settings = self._settings
            text = self._require_text("text", text, settings)
            file_path = render_path(
                settings.file_path_format, timestamp or _dt.datetime.now()
            )

            return self._dispatch(settings, text, file_path)

    # --------------------- internal helpers ---------------------
    def _write(
        self,
        sender: Sender | str,
        timestamp: _dt.datetime | None,
        message: str | None,
        details: Any,
    ) -> Outputs:
        with self._lock:
            settings = self._settings
            resolved_at = timestamp or _dt.datetime.now()

            text = self._render(settings, sender, resolved_at, message, details)
            file_path = render_path(settings.file_path_format, resolved_at)

            return self._dispatch(settings, text, file_path)

    def _render(
        self,
        settings: LogSettings,
        sender: Sender | str,
        timestamp: _dt.datetime,
        message: str | None,
        details: Any,
    ) -> str:
        resolved_sender = _coerce_sender(sender)

        if timestamp is None:
            raise ArgumentError("timestamp")

        message = self._require_text("message", message, settings)

        if details is _NO_DETAILS:
            return render_message(settings.message_format, resolved_sender, timestamp, message)

        details = self._require_text("details", details, settings)

        return render_message(
            settings.message_details_format, resolved_sender, timestamp, message, details
        )

    @staticmethod
    def _require_text(name: str, value: str | None, settings: LogSettings) -> str:
        if value is not None:
            return value

        if not settings.allow_write_null_messages:
            raise ArgumentError(name)

        return NULL_PLACEHOLDER

    def _dispatch(self, settings: LogSettings, text: str, file_path: str) -> Outputs:
        result = self._dispatcher.dispatch(text, file_path, _enabled_outputs(settings))
        failed = result.failed

        if result.ok:
            return Outputs.NONE

        if settings.auto_disable_write_outputs:
            self._disable_outputs(failed)

        if settings.ignore_write_exceptions:
            record_suppressed()
            logger.debug("sinklog suppressed write failure for %s", failed)
            return failed

        raise WriteError(result.failures)

    def _disable_outputs(self, failed: Outputs) -> None:
        changes = {
            _ENABLE_FIELDS[output]: False
            for output in OUTPUT_ORDER
            if output in failed
        }

        self._settings = replace(self._settings, **changes)

        for output in OUTPUT_ORDER:
            if output in failed:
                record_auto_disable(output)
                logger.warning("sinklog disabled %s output after failure", output.name.lower())


def _coerce_sender(sender: Sender | str) -> Sender:
    if sender is None:
        raise ArgumentError("sender")

    if isinstance(sender, Sender):
        return sender

    try:
        return Sender(sender)
    except ValueError:
        try:
            return Sender[str(sender).upper()]
        except KeyError:
            raise ArgumentError("sender", f"is not a known sender: {sender!r}") from None


_DEFAULT_LOCK = threading.Lock()
_DEFAULT: Log | None = None


def get_default_log() -> Log:
    """Return the process-wide default logger, building it on first use."""

    global _DEFAULT

    with _DEFAULT_LOCK:
        if _DEFAULT is None:
            _DEFAULT = Log(get_settings())

        return _DEFAULT


def configure_default_log(settings: LogSettings) -> Log:
    """Replace the process-wide default logger with one built from ``settings``."""

    global _DEFAULT

    log = Log(settings)

    with _DEFAULT_LOCK:
        _DEFAULT = log

    return log


def reset_default_log() -> None:
    global _DEFAULT

    with _DEFAULT_LOCK:
        _DEFAULT = None
