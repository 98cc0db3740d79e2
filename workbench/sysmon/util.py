"""Helpers for the system monitor: CPU fields, time and bar formatting."""

from __future__ import annotations

import re
from enum import IntEnum
from typing import TextIO

_BAR_WIDTH = 50
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class CPUState(IntEnum):
    """Field positions in a ``cpu`` line of /proc/stat."""

    USER = 1
    NICE = 2
    SYSTEM = 3
    IDLE = 4
    IOWAIT = 5
    IRQ = 6
    SOFTIRQ = 7
    STEAL = 8
    GUEST = 9
    GUEST_NICE = 10


def _trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


def convert_to_time(seconds: int) -> str:
    """Format a number of seconds as ``h:m:s`` without zero padding."""
    minutes, secs = _trunc_divmod(int(seconds), 60)
    hours, minutes = _trunc_divmod(minutes, 60)
    return f"{hours}:{minutes}:{secs}"


def progress_bar(percent: str | float) -> str:
    """Render a 50-cell bar for a percentage, one bar per 2%."""
    text = percent if isinstance(percent, str) else str(percent)
    match = _FLOAT_PREFIX.match(text)
    try:
        filled = int(float(match.group()) / 100 * _BAR_WIDTH) if match else 0
    except (OverflowError, ValueError):
        filled = 0
    bar = "".join("|" if i <= filled else " " for i in range(_BAR_WIDTH))
    return f"0% {bar} {text[:5]} /100%"


def open_stream(path: str) -> TextIO:
    """Open a text file for reading; a missing file means the process is gone."""
    try:
        return open(path, encoding="utf-8", errors="replace")
    except OSError as err:
        raise ProcessLookupError(f"Non-existing PID: {path}") from err