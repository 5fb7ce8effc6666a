"""
Zipkin v2 JSON output.

Spans are written as a ListOfSpans array accepted by the Zipkin v2 API.
See https://zipkin.io/zipkin-api/
"""

import hashlib
import json
from typing import Any, Dict, Iterable

from ..core.span import Span
from ..core.trace import Trace
from .base import Formatter

SERVICE_NAME = 'puppetserver'


def hex_id(span_id: str) -> str:
    """Zipkin span and parent ids are exactly 16 hex characters."""
    return hashlib.sha256(span_id.encode('utf-8')).hexdigest()[:16]


class ZipkinFormatter(Formatter):
    """Writes spans with non-zero inclusive time as a JSON array."""

    def write(self, traces: Iterable[Trace]) -> None:
        first = True
        self.output.write('[')

        for trace in traces:
            for node in trace:
                if node.inclusive_time <= 0:
                    continue

                if first:
                    first = False
                else:
                    self.output.write(',')

                self.output.write(json.dumps(self.convert_span(node.span)))

        self.output.write(']')

    @staticmethod
    def convert_span(span: Span) -> Dict[str, Any]:
        result = {
            # Zipkin accepts 16 to 32 hex characters for trace ids
            'traceId': span.trace_id.replace('-', ''),
            'id': hex_id(span.id),
            'name': span.name,
            'kind': 'SERVER',
            'localEndpoint': {'serviceName': SERVICE_NAME},
        }

        parent_id = span.parent_id
        if parent_id is not None:
            result['parentId'] = hex_id(parent_id)

        # Microseconds since the epoch
        if span.start_time is not None:
            result['timestamp'] = int(span.start_time.timestamp() * 10**6)
        result['duration'] = int(span.duration * 10**6)

        tags = {k: str(v) for k, v in span.tags.items() if k != 'span.kind'}
        if tags:
            result['tags'] = tags

        return result
