"""Core value types shared by the logger, dispatcher and sinks."""

from __future__ import annotations

import enum
import os


NULL_PLACEHOLDER = "NULL"

DEFAULT_FILE_PATH_FORMAT = os.path.join("logs", "log_{0:%Y-%m-%d}.txt")
DEFAULT_MESSAGE_FORMAT = r"({0} {1:%Y-%m-%d %H:%M:%S}) {2}\n"
DEFAULT_MESSAGE_DETAILS_FORMAT = r"({0} {1:%Y-%m-%d %H:%M:%S}) {2}\n(Details)\n{3}\n"


class Sender(enum.Enum):
    """Originator tag interpolated into rendered messages."""

    LOG = "Log"
    USER = "User"
    ERROR = "Error"
    DEBUG = "Debug"

    def __str__(self) -> str:
        return self.value


class Outputs(enum.Flag):
    """Set of sinks, used to report which sinks failed on a write."""

    NONE = 0
    CUSTOM = 1
    CONSOLE = 2
    FILE = 4
    ALL = CUSTOM | CONSOLE | FILE


# Dispatch order for a single write.
OUTPUT_ORDER = (Outputs.CUSTOM, Outputs.CONSOLE, Outputs.FILE)
