"""Clock helpers and the time expression parser."""

from __future__ import annotations

import re
import time
from typing import Dict

from ..errors import TimeFormatError, message

_TIME_RE = re.compile(r"^([0-9]+(?:\.[0-9]+)?)(ms|s|m|h|d|M|y)$")

_DAY_MS = 24 * 60 * 60 * 1000

UNIT_MS: Dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": _DAY_MS,
    "M": 30 * _DAY_MS,
    "y": 365 * _DAY_MS,
}

MAX_LIFETIME_MS = 365 * _DAY_MS


def now_ms() -> float:
    """Return wall-clock epoch time in milliseconds."""
    return time.time() * 1000


def now_seconds() -> int:
    """Return wall-clock epoch time truncated to whole seconds."""
    return int(time.time())


def parse_time_to_ms(text: str) -> float:
    """Parse a time expression such as ``"1h"`` or ``"500ms"`` into milliseconds.

    Units are case-sensitive: ``m`` is minutes and ``M`` is 30-day months.
    The result must be positive and may not exceed one year.
    """
    if not isinstance(text, str) or not text.strip():
        raise TimeFormatError(message("TIME_STRING_NON_EMPTY"))

    match = _TIME_RE.match(text.strip())
    if match is None:
        raise TimeFormatError(message("TIME_FORMAT_INVALID"))

    value = float(match.group(1))
    if value <= 0:
        raise TimeFormatError(message("TIME_VALUE_NOT_POSITIVE"))

    milliseconds = value * UNIT_MS[match.group(2)]
    if milliseconds > MAX_LIFETIME_MS:
        raise TimeFormatError(message("TIME_VALUE_TOO_LARGE"))
    return milliseconds
