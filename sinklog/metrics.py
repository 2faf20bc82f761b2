"""In-process metrics for the sinklog runtime."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict

from .schema import OUTPUT_ORDER, Outputs


@dataclass
class RuntimeMetrics:
    """Runtime metrics for the sinklog runtime."""

    writes_total: int = 0 # The total number of dispatched writes
    failed_writes_total: int = 0 # Writes where at least one sink failed
    suppressed_total: int = 0 # Failed writes hidden from the caller
    sink_failures: Dict[str, int] | None = None # Failures per sink name
    auto_disabled: Dict[str, int] | None = None # Auto-disable events per sink name

    def as_dict(self) -> dict[str, object]:
        """Return the metrics as a dictionary."""

        return {
            "writes_total": self.writes_total,
            "failed_writes_total": self.failed_writes_total,
            "suppressed_total": self.suppressed_total,
            "sink_failures": dict(self.sink_failures or {}),
            "auto_disabled": dict(self.auto_disabled or {}),
        }


_LOCK = threading.RLock()
_METRICS = RuntimeMetrics(sink_failures={}, auto_disabled={})


def _sink_key(output: Outputs) -> str:
    return (output.name or str(output.value)).lower()


def record_write(failed: Outputs) -> None:
    """Record a dispatched write and the sinks that failed on it."""

    with _LOCK:
        _METRICS.writes_total += 1

        if not failed:
            return

        _METRICS.failed_writes_total += 1
        failures = _METRICS.sink_failures or {}

        for output in OUTPUT_ORDER:
            if output not in failed:
                continue
            key = _sink_key(output)
            failures[key] = failures.get(key, 0) + 1

        _METRICS.sink_failures = failures


def record_auto_disable(output: Outputs) -> None:
    """Record that ``output`` was switched off after failing."""

    with _LOCK:
        disabled = _METRICS.auto_disabled or {}
        key = _sink_key(output)
        disabled[key] = disabled.get(key, 0) + 1
        _METRICS.auto_disabled = disabled


def record_suppressed() -> None:
    with _LOCK:
        _METRICS.suppressed_total += 1


def reset_metrics() -> None:
    """Reset the metrics."""

    with _LOCK:
        _METRICS.writes_total = 0
        _METRICS.failed_writes_total = 0
        _METRICS.suppressed_total = 0
        _METRICS.sink_failures = {}
        _METRICS.auto_disabled = {}


def get_metrics() -> RuntimeMetrics:
    """Get the metrics."""

    with _LOCK:
        return RuntimeMetrics(**_METRICS.as_dict())
