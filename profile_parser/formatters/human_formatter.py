"""
Human-readable output.

Every trace is printed as an indented list of spans, followed by summary
tables of the most expensive operations sorted by exclusive time.
"""

from typing import IO, Iterable, List

from ..core.trace import Trace
from ..core.types import KindSummary
from ..processors.kind_aggregator import KindAggregator
from . import tty
from .base import Formatter

ELLIPSIS = '…'
# Fixed to 72 columns
SOURCE_WIDTH = 50
TIME_WIDTH = 19


def truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:width - 1] + ELLIPSIS


class HumanFormatter(Formatter):
    """Writes indented traces and per-kind summary tables."""

    def __init__(self, output: IO, use_color: bool = False):
        """
        Args:
            output: Text stream to write to
            use_color: Colorize span ids and times with ANSI escape codes
        """
        super().__init__(output)
        self.use_color = use_color
        self.aggregator = KindAggregator()

    def write(self, traces: Iterable[Trace]) -> None:
        traces = list(traces)

        for trace in traces:
            for node in trace:
                indent = ' ' * node.depth
                span_id = tty.green(node.span.id, self.use_color)
                time = tty.yellow(f"({node.inclusive_time} ms)", self.use_color)
                self.output.write(f"{indent}{span_id} {node.span.name} {time}\n")

            self.output.write('\n\n')

        for summary in self.aggregator.summarize(traces):
            self.write_summary(summary)

    def write_summary(self, summary: KindSummary) -> None:
        lines: List[str] = [
            f"\n--- {summary['title']} ---",
            f"Total time: {summary['total_time_ms']} ms",
            'Itemized:',
            f"{'Source':<{SOURCE_WIDTH}} | {'Time':<{TIME_WIDTH}}",
            '-' * SOURCE_WIDTH + '-+-' + '-' * TIME_WIDTH,
        ]
        for row in summary['rows']:
            if row['time_ms'] == 0:
                continue
            lines.append(f"{truncate(row['source'], SOURCE_WIDTH):<{SOURCE_WIDTH}} | {row['time_ms']} ms")

        self.output.write('\n'.join(lines) + '\n')
