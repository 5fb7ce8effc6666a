"""
Time formatting utilities for human-readable and CSV output.
"""

from datetime import datetime, timezone
from typing import Optional


def format_time(ms: int) -> str:
    """
    Format time in milliseconds to a human-readable string.

    Args:
        ms: Time in milliseconds

    Returns:
        Formatted time string (e.g., "123 ms", "2.34 s", "1m 30.50s")
    """
    if ms < 1000:
        return f"{ms} ms"
    elif ms < 60000:
        return f"{ms/1000:.2f} s"
    else:
        minutes = int(ms / 60000)
        seconds = (ms % 60000) / 1000
        return f"{minutes}m {seconds:.2f}s"


def format_timestamp(value: Optional[datetime]) -> str:
    """
    Format a datetime as ISO 8601 with four fractional digits.

    The Puppet profiler prints durations with four digits of precision,
    so timestamps derived from them keep the same precision. UTC is
    written as "Z". Naive datetimes are taken as local time.

    Args:
        value: Datetime to format, or None

    Returns:
        String such as '2018-02-18T18:43:53.3370+00:00', or '' for None
    """
    if value is None:
        return ''

    if value.tzinfo is timezone.utc:
        offset = 'Z'
    else:
        if value.tzinfo is None:
            value = value.astimezone()
        offset = value.strftime('%z')
        offset = f"{offset[:3]}:{offset[3:]}" if offset else ''
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{value.microsecond // 100:04d}{offset}"
