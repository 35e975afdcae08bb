"""Parsing of Go-style duration strings such as ``90s``, ``1m30s`` or ``1.5h``."""

import re
from datetime import timedelta
from typing import Final

_UNIT_NANOSECONDS: Final[dict[str, int]] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}

# Longest units first so "ms" is not read as "m" followed by "s"
_COMPONENT: Final[re.Pattern[str]] = re.compile(
    r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
)
_DURATION: Final[re.Pattern[str]] = re.compile(
    r"[-+]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+"
)


def parse_duration(value: str) -> timedelta:
    """Parse a duration string.

    A duration is an optionally signed sequence of decimal numbers, each with
    a unit suffix. Valid units are ``ns``, ``us`` (or ``µs``), ``ms``, ``s``,
    ``m`` and ``h``. The bare string ``0`` is also accepted.

    Args:
        value: Duration string, e.g. ``"1m"`` or ``"-2h45m"``

    Returns:
        The parsed duration

    Raises:
        ValueError: If the string is not a valid duration or is out of range
    """
    text = value.strip()
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION.fullmatch(text):
        raise ValueError(f"invalid duration {value!r}")

    negative = text.startswith("-")
    try:
        nanoseconds = sum(
            float(number) * _UNIT_NANOSECONDS[unit] for number, unit in _COMPONENT.findall(text)
        )
        total = timedelta(microseconds=nanoseconds / 1_000)
    except OverflowError as e:
        raise ValueError(f"invalid duration {value!r}: out of range") from e
    return -total if negative else total


def format_duration(value: timedelta) -> str:
    """Render a duration in the same notation ``parse_duration`` accepts."""
    seconds = value.total_seconds()
    if seconds == 0:
        return "0s"

    sign = "-" if seconds < 0 else ""
    remaining = abs(seconds)
    hours, remaining = divmod(remaining, 3600)
    minutes, remaining = divmod(remaining, 60)

    parts = []
    if hours:
        parts.append(f"{int(hours)}h")
    if minutes:
        parts.append(f"{int(minutes)}m")
    if remaining:
        parts.append(f"{remaining:g}s")
    return sign + "".join(parts)
