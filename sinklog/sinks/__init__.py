"""Sink implementations."""

from .console import ConsoleSink
from .custom import CustomSink
from .file import FileSink
from .memory import InMemorySink

__all__ = ["ConsoleSink", "CustomSink", "FileSink", "InMemorySink"]
