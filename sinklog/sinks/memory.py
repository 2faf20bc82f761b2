"""In-memory sink useful for debugging and tests."""

from __future__ import annotations

from typing import List


class InMemorySink:
    def __init__(self) -> None:
        self.records: List[str] = []

    def __call__(self, text: str) -> None:
        self.records.append(text)

    def emit(self, text: str, file_path: str) -> None:
        self.records.append(text)
