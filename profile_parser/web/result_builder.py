"""
Result builder for web interface output.
"""

from ..formatters import format_time
from ..processors import KindAggregator


def prepare_results(parser):
    """
    Convert parsed traces to a structured format for JSON output.

    Args:
        parser: LogParser instance with completed parsing

    Returns:
        Dictionary with a summary, one entry per trace and the per-kind
        exclusive time tables
    """
    traces = []
    for trace in parser.traces:
        root = trace.span
        traces.append({
            'trace_id': trace.trace_id,
            'name': root.name,
            'start_time': root.start_time.isoformat() if root.start_time else None,
            'span_count': len(trace),
            'inclusive_time_ms': trace.inclusive_time,
            'inclusive_time_formatted': format_time(trace.inclusive_time),
        })

    traces.sort(key=lambda x: -x['inclusive_time_ms'])

    operations = KindAggregator().summarize(parser.traces)
    for group in operations:
        group['total_time_formatted'] = format_time(group['total_time_ms'])
        group['rows'] = [row for row in group['rows'] if row['time_ms'] > 0]

    total_time = sum(t['inclusive_time_ms'] for t in traces)
    summary = {
        'total_traces': len(traces),
        'total_spans': sum(t['span_count'] for t in traces),
        'pending_spans': parser.pending_spans,
        'total_time_ms': total_time,
        'total_time_formatted': format_time(total_time),
    }

    return {
        'summary': summary,
        'traces': traces,
        'operations': operations,
    }
