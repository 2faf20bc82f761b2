"""Callback sink fanning rendered messages out to in-process subscribers."""

from __future__ import annotations

import logging
import threading
from typing import Callable, List

from ..errors import ArgumentError, SinkError

logger = logging.getLogger(__name__)

Callback = Callable[[str], None]


class CustomSink:
    """Ordered set of callbacks invoked synchronously on every write.

    Every subscriber runs even when an earlier one raises; the collected
    failures surface as a single :class:`SinkError` once all have run.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock() # The lock for the subscriber list
        self._callbacks: List[Callback] = [] # Subscribers in registration order

    def register(self, callback: Callback) -> None:
        """Register ``callback``; registering it twice is a no-op."""

        if callback is None:
            raise ArgumentError("callback")

        with self._lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)

    def unregister(self, callback: Callback) -> bool:
        """Remove ``callback``, returning whether it was registered."""

        if callback is None:
            raise ArgumentError("callback")

        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                return False
            return True

    @property
    def callbacks(self) -> tuple[Callback, ...]:
        with self._lock:
            return tuple(self._callbacks)

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def emit(self, text: str, file_path: str) -> None:
        """Invoke every registered callback with ``text``."""

        errors: List[BaseException] = []

        for callback in self.callbacks:
            try:
                callback(text)
            except Exception as exc:
                logger.debug("custom log callback %r raised", callback, exc_info=True)
                errors.append(exc)

        if errors:
            raise SinkError(
                f"{len(errors)} custom log callback(s) failed", errors
            ) from errors[0]
