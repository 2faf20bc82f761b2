"""Template rendering for log messages and file paths.

Templates use :meth:`str.format` positional fields:

* path templates receive ``(timestamp,)``, e.g. ``logs/log_{0:%Y-%m-%d}.txt``
* message templates receive ``(sender, timestamp, message)``
* message-details templates receive ``(sender, timestamp, message, details)``

Message templates may be written on a single line: ``\\n``, ``\\r`` and
``\\\\`` escapes are expanded at render time (see :func:`expand_escapes`).
Path templates are used verbatim so Windows separators survive.
"""

from __future__ import annotations

import datetime as _dt
import functools
from typing import Any

from .errors import FormatError
from .schema import Sender


PROBE_SENDER = Sender.LOG
PROBE_MESSAGE = "Message"
PROBE_DETAILS = "Details"

_ESCAPES = {"n": "\n", "r": "\r", "\\": "\\"}


@functools.lru_cache(maxsize=64)
def expand_escapes(template: str) -> str:
    """Expand backslash escapes in a single-line template.

    An escaped character outside ``n``, ``r`` and ``\\`` stands for itself;
    a trailing lone backslash is dropped.
    """

    result = []
    escaped = False

    for char in template:
        if escaped:
            result.append(_ESCAPES.get(char, char))
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            result.append(char)

    return "".join(result)


def _format(template: str, *args: Any) -> str:
    try:
        return template.format(*args)
    except (ValueError, IndexError, KeyError, AttributeError, TypeError) as exc:
        raise FormatError(f"cannot render template {template!r}: {exc}") from exc


def render_path(template: str, timestamp: _dt.datetime) -> str:
    """Render a file path template for ``timestamp``."""

    return _format(template, timestamp)


def render_message(
    template: str,
    sender: Sender,
    timestamp: _dt.datetime,
    message: str,
    *details: str,
) -> str:
    """Render a message template.

    Pass ``details`` only with a message-details template.
    """

    if len(details) > 1:
        raise TypeError("render_message accepts at most one details value")

    return _format(expand_escapes(template), sender.value, timestamp, message, *details)


def probe_path(template: str, timestamp: _dt.datetime | None = None) -> str:
    return render_path(template, timestamp or _dt.datetime.now())


def probe_message(template: str, *, with_details: bool = False) -> str:
    args = (PROBE_DETAILS,) if with_details else ()

    return render_message(
        template, PROBE_SENDER, _dt.datetime.now(), PROBE_MESSAGE, *args
    )
