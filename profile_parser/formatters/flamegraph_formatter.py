"""
Input for flamegraph.pl.

Each span with exclusive time is written as a semicolon-delimited stack
of operation names followed by its exclusive time in milliseconds.
See https://github.com/brendangregg/FlameGraph
"""

from typing import Iterable, List

from ..core.trace import Trace
from ..processors.kind_aggregator import KindAggregator
from .base import Formatter


class FlameGraphFormatter(Formatter):
    """Writes folded stacks, one line per span with non-zero exclusive time."""

    def write(self, traces: Iterable[Trace]) -> None:
        for trace in traces:
            for node in trace:
                if node.exclusive_time == 0:
                    continue
                self.output.write(f"{self.stack_label(node)} {node.exclusive_time}\n")

    @staticmethod
    def stack_label(node: Trace) -> str:
        """Join the operation stack of a finalized node with semicolons."""
        stack: List[str] = list(node.stack)
        # Resources other than classes are folded into their type
        stack[-1] = KindAggregator.source_key(node.span)

        # flamegraph.pl uses ; as the frame separator
        return ';'.join(frame.replace(';', '') for frame in stack)
