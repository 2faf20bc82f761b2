"""Synchronous fan-out of rendered messages to the enabled sinks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Protocol

from .errors import ArgumentError
from .metrics import record_write
from .schema import OUTPUT_ORDER, Outputs

logger = logging.getLogger(__name__)


class Sink(Protocol):
    """A destination for rendered log text."""

    def emit(self, text: str, file_path: str) -> None:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one dispatch: the exception raised by each failed sink."""

    failures: Mapping[Outputs, BaseException] = field(default_factory=dict)

    @property
    def failed(self) -> Outputs:
        outputs = Outputs.NONE

        for output in self.failures:
            outputs |= output

        return outputs

    @property
    def ok(self) -> bool:
        return not self.failures


class Dispatcher:
    """Deliver one rendered message to every enabled sink.

    Every enabled sink is attempted; a failing sink never prevents delivery
    to the others. Locking is the caller's responsibility.
    """

    def __init__(self, sinks: Mapping[Outputs, Sink]) -> None:
        """Initialize the dispatcher with one sink per output."""

        unknown = set(sinks) - set(OUTPUT_ORDER)

        if unknown:
            raise ValueError(f"Unknown outputs for dispatcher: {sorted(map(str, unknown))}")

        self._sinks: Dict[Outputs, Sink] = dict(sinks) # The sink bound to each output

    def sink(self, output: Outputs) -> Sink | None:
        return self._sinks.get(output)

    def register_sink(self, output: Outputs, sink: Sink) -> None:
        """Bind ``sink`` to ``output``, replacing any previous sink."""

        if output not in OUTPUT_ORDER:
            raise ValueError(f"Unknown output: {output!r}")

        self._sinks[output] = sink

    def dispatch(self, text: str, file_path: str, enabled: Outputs) -> DispatchResult:
        """Send ``text`` to each sink in ``enabled`` and collect failures."""

        if text is None:
            raise ArgumentError("text")

        if file_path is None:
            raise ArgumentError("file_path")

        failures: Dict[Outputs, BaseException] = {}

        for output in OUTPUT_ORDER:
            if output not in enabled:
                continue

            sink = self._sinks.get(output)
            if sink is None:
                continue

            try:
                sink.emit(text, file_path)
            except Exception as exc:
                logger.warning(
                    "sinklog %s output failed: %s", output.name.lower(), exc
                )
                failures[output] = exc

        result = DispatchResult(failures)

        record_write(result.failed)

        return result
