"""
Aggregation of exclusive time by operation kind.
"""

from collections import defaultdict
from typing import Dict, Iterable, List

from ..core.span import Span
from ..core.trace import Trace
from ..core.types import KindSummary, OperationKind

# Summary groups in display order
KIND_TITLES: Dict[OperationKind, str] = {
    OperationKind.FUNCTION_CALL: 'Function calls',
    OperationKind.RESOURCE_EVAL: 'Resource evaluations',
    OperationKind.PUPPETDB_CALL: 'PuppetDB operations',
    OperationKind.HTTP_REQUEST: 'HTTP Requests',
    OperationKind.OTHER: 'Other evaluations',
}


class KindAggregator:
    """Sums exclusive time of spans per operation kind and source."""

    @staticmethod
    def source_key(span: Span) -> str:
        """
        Label under which a span's time is itemized.

        Resources other than classes are aggregated by resource type,
        everything else is itemized by name.
        """
        resource_type = span.tags.get('puppet.resource_type')
        if resource_type is None or resource_type == 'Class':
            return span.name
        return resource_type

    def summarize(self, traces: Iterable[Trace]) -> List[KindSummary]:
        """
        Build one summary per operation kind over all finalized traces.

        Args:
            traces: Finalized Trace instances

        Returns:
            List of KindSummary dicts in KIND_TITLES order. Rows are sorted
            by exclusive time, descending.
        """
        totals: Dict[OperationKind, int] = defaultdict(int)
        itemized: Dict[OperationKind, Dict[str, int]] = defaultdict(lambda: defaultdict(int))

        for trace in traces:
            for node in trace:
                kind = node.span.kind
                totals[kind] += node.exclusive_time
                itemized[kind][self.source_key(node.span)] += node.exclusive_time

        summaries = []
        for kind, title in KIND_TITLES.items():
            rows = sorted(itemized[kind].items(), key=lambda item: -item[1])
            summaries.append({
                'title': title,
                'kind': kind.value,
                'total_time_ms': totals[kind],
                'rows': [{'source': source, 'time_ms': time_ms} for source, time_ms in rows],
            })

        return summaries
