"""
Time conversion and manipulation utilities for subtitle processing.

This module provides functions for:
- Parsing clock-style timestamps with a configurable fraction separator
- Formatting durations back into clock-style timestamps
- Human-readable duration formatting for logs and the CLI

Durations are ``datetime.timedelta`` values measured from media start and may
be negative.
"""

from datetime import timedelta
from typing import Tuple
from subkit.core.errors import FormatError, UnsupportedFormatError
from subkit.utils.constants import TIMESTAMP_LAYOUTS
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)

MAX_FRACTION_DIGITS = 3


def _parse_int(part: str, source: str) -> int:
    """Parse one whitespace-trimmed numeric timestamp component."""
    part = part.strip()
    try:
        return int(part)
    except ValueError:
        raise FormatError(f"Non-numeric component '{part}' in timestamp '{source}'") from None


def parse_duration(text: str, fraction_separator: str, fraction_digits: int) -> timedelta:
    """
    Parse a clock-style timestamp into a duration.

    The fractional part follows the last ``fraction_separator`` and is scaled to
    milliseconds according to ``fraction_digits`` (a 2-digit field with
    ``fraction_digits=3`` is multiplied by 10). The remainder is either
    ``mm:ss`` or ``hh:mm:ss``, optionally preceded by "-".

    Args:
        text: Timestamp such as "00:01:02,500", "01:02.500" or "0:01:02.50"
        fraction_separator: Separator between seconds and the fraction
        fraction_digits: Number of digits the fraction is expressed in

    Returns:
        Parsed duration

    Raises:
        FormatError: If the fraction is too long, the number of clock fields
            is not 2 or 3, or a component is not numeric

    Example:
        >>> parse_duration("00:01:02,5", ",", 3)
        datetime.timedelta(seconds=62, microseconds=500000)
    """
    negative = text.strip().startswith('-')
    if negative:
        text = text.strip()[1:]

    milliseconds = 0
    head, separator, fraction = text.rpartition(fraction_separator)
    if separator:
        fraction = fraction.strip()
        if len(fraction) > MAX_FRACTION_DIGITS:
            raise FormatError(f"Invalid number of fraction digits detected in '{text}'")
        milliseconds = _parse_int(fraction, text)
        milliseconds = int(milliseconds * 10 ** (fraction_digits - len(fraction)))
    else:
        head = text

    parts = head.strip().split(':')
    if len(parts) == 2:
        hours_part, (minutes_part, seconds_part) = None, parts
    elif len(parts) == 3:
        hours_part, minutes_part, seconds_part = parts
    else:
        raise FormatError(f"No hours, minutes or seconds detected in '{text}'")

    seconds = _parse_int(seconds_part, text)
    minutes = _parse_int(minutes_part, text)
    hours = _parse_int(hours_part, text) if hours_part is not None and hours_part.strip() else 0

    duration = timedelta(hours=hours, minutes=minutes, seconds=seconds, milliseconds=milliseconds)
    return -duration if negative else duration


def format_duration(duration: timedelta, fraction_separator: str, fraction_digits: int) -> str:
    """
    Format a duration as ``hh:mm:ss<sep><fraction>``.

    Hours, minutes and seconds are zero-padded to 2 digits. The fraction is
    truncated (never rounded) to ``fraction_digits`` digits. A negative
    duration is written as its magnitude prefixed with "-".

    Args:
        duration: Duration to format
        fraction_separator: Separator between seconds and the fraction
        fraction_digits: Number of fraction digits to emit

    Returns:
        Formatted timestamp

    Example:
        >>> format_duration(timedelta(seconds=3825.678), ",", 3)
        '01:03:45,678'
        >>> format_duration(timedelta(seconds=3825.678), ".", 2)
        '01:03:45.67'
    """
    sign = '-' if duration < timedelta(0) else ''
    total_ms = abs(duration) // timedelta(milliseconds=1)
    total_seconds, remainder_ms = divmod(total_ms, 1000)
    minutes_total, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(minutes_total, 60)
    fraction = remainder_ms // 10 ** (MAX_FRACTION_DIGITS - fraction_digits)
    return (f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
            f"{fraction_separator}{str(fraction).rjust(fraction_digits, '0')}")


class TimeConverter:
    """Handles time format conversions for the supported subtitle formats."""

    @staticmethod
    def layout_for(format_type) -> Tuple[str, int]:
        """
        Get the canonical (separator, digits) layout of a subtitle format.

        Args:
            format_type: SubtitleFormat value

        Returns:
            Tuple of (fraction_separator, fraction_digits)

        Raises:
            UnsupportedFormatError: If the format has no textual timestamp layout
        """
        if format_type not in TIMESTAMP_LAYOUTS:
            raise UnsupportedFormatError(f"No timestamp layout for format: {format_type}")
        return TIMESTAMP_LAYOUTS[format_type]

    @staticmethod
    def time_to_duration(time_str: str, format_type) -> timedelta:
        """
        Convert a timestamp string to a duration using a format's layout.

        The fraction is always read as milliseconds, so the centisecond
        timestamps written for SSA ("0:00:01.50") come back as 1.5 seconds.

        Example:
            >>> TimeConverter.time_to_duration("01:23:45,678", SubtitleFormat.SRT)
        """
        separator, _ = TimeConverter.layout_for(format_type)
        return parse_duration(time_str, separator, MAX_FRACTION_DIGITS)

    @staticmethod
    def duration_to_time(duration: timedelta, format_type) -> str:
        """Convert a duration to a timestamp string using a format's layout."""
        separator, digits = TimeConverter.layout_for(format_type)
        return format_duration(duration, separator, digits)

    @staticmethod
    def format_readable(duration: timedelta) -> str:
        """
        Format duration to a human-readable string.

        Args:
            duration: Duration to format

        Returns:
            Human-readable duration string

        Example:
            >>> TimeConverter.format_readable(timedelta(seconds=3825.5))
            '1h 3m 45.5s'
        """
        seconds = duration.total_seconds()
        sign = '-' if seconds < 0 else ''
        seconds = abs(seconds)
        if seconds < 60:
            return f"{sign}{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            return f"{sign}{minutes}m {seconds % 60:.1f}s"
        else:
            hours = int(seconds // 3600)
            remaining_seconds = seconds % 3600
            minutes = int(remaining_seconds // 60)
            return f"{sign}{hours}h {minutes}m {remaining_seconds % 60:.1f}s"
