"""Parsing of Go-style duration strings such as ``10s``, ``5m`` or ``1m30s``."""

import math
import re

_UNITS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_PART_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_DURATION_RE = re.compile(r"^(?:\d+(?:\.\d+)?(?:ms|h|m|s))+$")


def parse_duration(value: str) -> float:
    """Return *value* in seconds.

    A bare number is taken as seconds.

    Raises:
        ValueError: if *value* is not a positive duration.
    """
    text = value.strip()
    try:
        seconds = float(text)
    except ValueError:
        if not _DURATION_RE.match(text):
            raise ValueError(f"Invalid duration '{value}'. Use e.g. 10s, 5m or 1m30s.")
        seconds = sum(float(num) * _UNITS[unit] for num, unit in _PART_RE.findall(text))

    if not math.isfinite(seconds) or seconds <= 0:
        raise ValueError(f"Duration '{value}' must be positive.")
    return seconds
