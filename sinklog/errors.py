"""Exception types raised by the sinklog runtime."""

from __future__ import annotations

from typing import Mapping, Sequence

from .schema import Outputs


class LogError(Exception):
    """Base class for every error raised by sinklog."""


class ArgumentError(LogError, ValueError):
    """A required value was ``None`` and null tolerance does not apply."""

    def __init__(self, name: str, reason: str = "must not be None") -> None:
        super().__init__(f"{name} {reason}")
        self.name = name


class SettingsError(LogError):
    """A candidate setting failed validation and was not committed."""


class FormatError(LogError):
    """A template could not be rendered with the supplied arguments."""


class SinkError(LogError):
    """A single sink failed to accept a rendered message."""

    def __init__(self, message: str, causes: Sequence[BaseException] = ()) -> None:
        super().__init__(message)
        self.causes = tuple(causes)


class WriteError(LogError):
    """One or more sinks failed during a write."""

    def __init__(self, failures: Mapping[Outputs, BaseException]) -> None:
        outputs = Outputs.NONE

        for output in failures:
            outputs |= output

        names = ", ".join(output.name.lower() for output in failures)
        super().__init__(f"log write failed for outputs: {names}")

        self.outputs = outputs # The aggregated set of failed sinks
        self.failures = dict(failures) # The underlying failure per sink
