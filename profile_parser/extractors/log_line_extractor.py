"""
Log line extraction for Puppet Server logs.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from ..core.errors import MalformedProfileLineError

# ISO 8601 timestamps, extended to allow a space between date and time
# and a comma before the sub-seconds as printed by the logback %d pattern.
ISO_8601 = (r'(?:\d+)-(?:\d\d)-(?:\d\d)'
            r'[T\s]'
            r'(?:\d\d):(?:\d\d):(?:\d\d)'
            r'(?:[\.,]\d+)?'
            r'(?:[Zz]|[+-]\d\d:\d\d)?')

TIMESTAMP_PARTS = re.compile(
    r'^(?P<datetime>\d+-\d\d-\d\d[T\s]\d\d:\d\d:\d\d)'
    r'(?:[\.,](?P<fraction>\d+))?'
    r'(?P<offset>Z|[+-]\d\d:\d\d)?$',
    re.IGNORECASE
)

def build_parser(profile_tag: str = 'PROFILE') -> re.Pattern:
    """
    Compile the line pattern for the default Puppet Server logback layout.

    The layout is %d %-5p [%t] [%c{2}] %m%n, with the message starting
    "Puppet <tag> [id]" or "<tag> [id]".

    Args:
        profile_tag: Keyword marking profiling lines

    Returns:
        Compiled pattern
    """
    return re.compile(
        r'^\s*'
        r'(?P<timestamp>' + ISO_8601 + r')\s+'
        r'(?P<log_level>[A-Z]+)\s+'
        r'\[(?P<thread_id>\S+)\]\s+'
        r'\[(?P<java_class>\S+)\]\s+'
        r'(?:Puppet\s+)?' + re.escape(profile_tag) + r'\s+\[(?P<request_id>[^\]]+)\]\s+'
        r'(?P<message>.*)$'
    )


DEFAULT_PARSER = build_parser()


class LogLineExtractor:
    """Extracts metadata and the PROFILE message from Puppet Server log lines."""

    def __init__(self, pattern: re.Pattern = DEFAULT_PARSER):
        self.pattern = pattern

    def extract(self, line: str) -> Optional[Dict]:
        """
        Split a log line into metadata and message.

        Args:
            line: Raw log line

        Returns:
            Dictionary with 'timestamp' (datetime), 'log_level', 'thread_id',
            'java_class', 'request_id' and 'message', or None if the line
            does not follow the log layout

        Raises:
            MalformedProfileLineError: If the timestamp matched the layout but
                is not a valid date
        """
        match = self.pattern.match(line.rstrip('\r\n'))
        if match is None:
            return None

        data = match.groupdict()
        data['timestamp'] = self.parse_timestamp(data['timestamp'], line)
        return data

    @staticmethod
    def parse_timestamp(value: str, line: str = '') -> datetime:
        """
        Convert a logback timestamp to a datetime.

        Timestamps without an offset are returned naive and are treated
        as local time, the same way the server wrote them.

        Args:
            value: Timestamp such as '2018-02-18 18:43:53,501'
            line: Source line, attached to errors

        Returns:
            Parsed datetime
        """
        match = TIMESTAMP_PARTS.match(value)
        if match is None:
            raise MalformedProfileLineError(f"Invalid timestamp: {value}", line)

        try:
            parsed = datetime.strptime(match.group('datetime').replace(' ', 'T'),
                                       '%Y-%m-%dT%H:%M:%S')
        except ValueError as e:
            raise MalformedProfileLineError(f"Invalid timestamp {value}: {e}", line) from e

        fraction = match.group('fraction')
        if fraction:
            parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, '0')))

        offset = match.group('offset')
        if offset:
            if offset.upper() == 'Z':
                parsed = parsed.replace(tzinfo=timezone.utc)
            else:
                sign = -1 if offset[0] == '-' else 1
                hours, minutes = int(offset[1:3]), int(offset[4:6])
                parsed = parsed.replace(
                    tzinfo=timezone(sign * timedelta(hours=hours, minutes=minutes))
                )

        return parsed
