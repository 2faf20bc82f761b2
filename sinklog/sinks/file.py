"""File sink appending rendered messages to timestamp-derived paths."""

from __future__ import annotations

from pathlib import Path


class FileSink:
    """Append rendered messages to the path resolved for each write."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def ensure_directory(self, path: str) -> None:
        """Create the parent directory of ``path`` if it is missing."""

        Path(path).parent.mkdir(parents=True, exist_ok=True)

    def append_text(self, path: str, text: str) -> None:
        with open(path, "a", encoding=self._encoding) as handle:
            handle.write(text)

    def check_writable(self, path: str) -> None:
        """Raise ``OSError`` unless ``path`` can be opened for appending."""

        self.ensure_directory(path)

        with open(path, "a", encoding=self._encoding):
            pass

    def emit(self, text: str, file_path: str) -> None:
        """Emit a rendered message to ``file_path``."""

        self.ensure_directory(file_path)
        self.append_text(file_path, text)
