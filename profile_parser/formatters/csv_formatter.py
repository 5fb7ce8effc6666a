"""
CSV output, one row per span.
"""

import csv
from typing import Dict, IO, Iterable

from ..core.trace import Trace
from .base import Formatter
from .time_formatter import format_timestamp

CSV_COLUMNS = ['timestamp', 'trace_id', 'span_id', 'name',
               'exclusive_time_ms', 'inclusive_time_ms']


class CsvFormatter(Formatter):
    """Writes a header followed by a row for every span of every trace."""

    def __init__(self, output: IO):
        super().__init__(output)
        self.writer = csv.writer(output, lineterminator='\n')
        self._header_written = False

    def write(self, traces: Iterable[Trace]) -> None:
        if not self._header_written:
            self.writer.writerow(CSV_COLUMNS)
            self._header_written = True

        for trace in traces:
            for node in trace:
                row = self.convert_span(node)
                self.writer.writerow([row[column] for column in CSV_COLUMNS])

    @staticmethod
    def convert_span(node: Trace) -> Dict:
        span = node.span
        return {
            'timestamp': format_timestamp(span.start_time),
            'trace_id': span.trace_id,
            'span_id': span.id,
            'name': span.name,
            'exclusive_time_ms': node.exclusive_time,
            'inclusive_time_ms': node.inclusive_time,
        }
