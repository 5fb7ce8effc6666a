"""
Classification of PROFILE messages into spans.
"""

import re
from typing import Dict, List, Optional, Tuple

from ..core.errors import MalformedProfileLineError
from ..core.span import Span
from ..core.types import OperationKind

# Span id and duration common to every PROFILE message
COMMON_DATA = re.compile(
    r'(?P<span_id>[\d\.]+)\s+'
    r'(?P<message>.*)'
    r':\stook\s(?P<duration>[\d\.]+)\sseconds$'
)

FUNCTION_CALL = re.compile(r'Called (?P<name>\S+)')
RESOURCE_EVAL = re.compile(
    r'Evaluated resource (?P<name>(?P<resource_type>[\w:]+)\[(?P<resource_title>.*)\])'
)
PUPPETDB_OP = re.compile(r'PuppetDB: (?P<name>[^\(]*)(?:\s\([\w\s]*: \d+\))?\Z')
# Most PuppetDB versions log queries without the "PuppetDB: " prefix.
PUPPETDB_QUERY = re.compile(r'(?P<name>Submitted query .*)')

HOSTNAME = (r'\b(?:[0-9A-Za-z][0-9A-Za-z-]{0,62})'
            r'(?:\.(?:[0-9A-Za-z][0-9A-Za-z-]{0,62}))*(?:\.?|\b)')
CERTNAME_REQUEST = re.compile(
    r'Processed\srequest\s'
    r'(?P<http_method>[A-Z]+)\s'
    r'(?P<name>.*/)(?P<peer_hostname>' + HOSTNAME + r')?\Z'
)
HTTP_REQUEST = re.compile(r'Processed request (?P<http_method>[A-Z]+) (?P<name>.*/)')

# Patterns tried in order, first match wins
MESSAGE_PATTERNS: List[Tuple[OperationKind, re.Pattern]] = [
    (OperationKind.FUNCTION_CALL, FUNCTION_CALL),
    (OperationKind.RESOURCE_EVAL, RESOURCE_EVAL),
    (OperationKind.PUPPETDB_CALL, PUPPETDB_OP),
    (OperationKind.PUPPETDB_CALL, PUPPETDB_QUERY),
    (OperationKind.HTTP_REQUEST, CERTNAME_REQUEST),
    (OperationKind.HTTP_REQUEST, HTTP_REQUEST),
]

# Regex group names mapped to OpenTracing style tag names
TAG_NAMES: Dict[str, str] = {
    'resource_type': 'puppet.resource_type',
    'resource_title': 'puppet.resource_title',
    'http_method': 'http.method',
    'peer_hostname': 'peer.hostname',
}

# There is no reliable way to get the server's hostname from the logs,
# so HTTP URLs use an RFC 2606 example domain.
SERVER_URL = 'https://puppetserver.example:8140'


class MessageClassifier:
    """Turns PROFILE messages into Span objects."""

    @staticmethod
    def split_message(message: str) -> Optional[Tuple[str, str, float]]:
        """
        Extract span id, operation message and duration.

        Args:
            message: PROFILE message, e.g. '1.2 Called include: took 0.0010 seconds'

        Returns:
            Tuple of (span_id, operation_message, duration_seconds) or None
            if the message does not follow the PROFILE layout

        Raises:
            MalformedProfileLineError: If the duration is not a number
        """
        match = COMMON_DATA.search(message.rstrip('\r\n'))
        if match is None:
            return None

        try:
            duration = float(match.group('duration'))
        except ValueError as e:
            raise MalformedProfileLineError(
                f"Invalid duration {match.group('duration')!r} in PROFILE message", message
            ) from e

        return match.group('span_id'), match.group('message'), duration

    @staticmethod
    def match_operation(operation: str) -> Tuple[OperationKind, str, Dict[str, str]]:
        """
        Determine kind, name and tags of an operation message.

        Messages matching none of the known patterns are classified as
        OperationKind.OTHER with the whole message as name.

        Args:
            operation: Operation part of a PROFILE message

        Returns:
            Tuple of (kind, name, tags)
        """
        for kind, pattern in MESSAGE_PATTERNS:
            match = pattern.search(operation)
            if match is None:
                continue

            groups = match.groupdict()
            name = groups.pop('name')
            tags = {TAG_NAMES[k]: v for k, v in groups.items() if v is not None}

            if kind is OperationKind.HTTP_REQUEST:
                tags['http.url'] = SERVER_URL + name + tags.get('peer.hostname', '')

            return kind, name, tags

        return OperationKind.OTHER, operation, {}

    def classify(self, message: str, metadata: Dict) -> Optional[Span]:
        """
        Create a Span from a PROFILE message.

        Args:
            message: PROFILE message with span id and duration
            metadata: Log line metadata; 'timestamp' is used as the finish time

        Returns:
            Span instance, or None if the message does not follow the
            PROFILE layout
        """
        common = self.split_message(message)
        if common is None:
            return None
        span_id, operation, duration = common

        kind, name, tags = self.match_operation(operation)
        tags['puppet.op_type'] = kind.value

        span = Span(
            name=name,
            kind=kind,
            duration=duration,
            finish_time=metadata.get('timestamp'),
            tags=tags,
        )
        span.context['span_id'] = span_id
        return span
