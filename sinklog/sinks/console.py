"""Console sink writing rendered messages to a text stream."""

from __future__ import annotations

import sys
from typing import TextIO


class ConsoleSink:
    """Write rendered messages to ``stream`` (``sys.stdout`` when omitted)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream # Explicit stream, resolved lazily otherwise

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        stream = self.stream
        stream.write(text)
        stream.flush()

    def emit(self, text: str, file_path: str) -> None:
        """Emit a rendered message to the console stream."""

        self.write(text)
