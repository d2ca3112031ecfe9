"""Human-readable byte-size and timestamp labels for archive nodes."""

from __future__ import annotations

from datetime import datetime

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_bytes(size: int | None) -> str:
    """Format ``size`` with decimal units and three significant digits.

    ``1536 -> "1.54 KB"``, ``12300 -> "12.3 KB"``, ``0 -> "0 B"``.
    ``None`` formats as an empty string.
    """
    if size is None:
        return ""
    prefix = "-" if size < 0 else ""
    value = float(abs(size))
    exponent = 0
    while value >= 1000 and exponent < len(BYTE_UNITS) - 1:
        value /= 1000
        exponent += 1
    # Round first so e.g. 999.7 renders as "1000" rather than in e-notation.
    rounded = float(f"{value:.3g}")
    return f"{prefix}{rounded:g} {BYTE_UNITS[exponent]}"


def coerce_timestamp(value: datetime | tuple[int, ...] | None) -> datetime | None:
    """Return ``value`` as ``datetime``; zip ``date_time`` tuples are accepted.

    Tuples that do not describe a valid date (zeroed DOS fields) give ``None``.
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime(*value[:6])
    except (TypeError, ValueError):
        return None


def format_timestamp(value: datetime | tuple[int, ...] | None) -> str:
    """Format a modification time as ``yyyy-MM-dd hh:mm:ss`` (24-hour)."""
    moment = coerce_timestamp(value)
    if moment is None:
        return ""
    return moment.strftime(TIMESTAMP_FORMAT)


__all__ = [
    "BYTE_UNITS",
    "TIMESTAMP_FORMAT",
    "coerce_timestamp",
    "format_bytes",
    "format_timestamp",
]
