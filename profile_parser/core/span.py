"""
Span model for a single profiled operation.

A Span holds the data parsed from one PROFILE log line. Most of the
identifying fields (trace id, parent reference, start time) stay empty
until the Span is placed in a Trace and the Trace is finalized.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from .types import OperationKind

# Tags attached to every span produced from Puppet Server logs
DEFAULT_TAGS: Dict[str, str] = {
    'component': 'puppetserver',
    'span.kind': 'server',
}


@dataclass
class Span:
    """
    Data for a single operation measured by the Puppet profiler.

    Profiling lines are written after the operation completes, so the
    log timestamp is the finish time of the span. The start time is
    derived from it by finish().

    Attributes:
        name: Operation name
        kind: OperationKind determined by the message pattern
        duration: Seconds spent on the operation, as printed in the log
        finish_time: Timestamp of the log line, or None if the log had none
        tags: Key/value data extracted from the log line
        context: 'trace_id' and 'span_id' identifying the span
        references: (relationship, span_id) tuples linking related spans
        start_time: Set by finish() when finish_time is known
    """
    name: Optional[str] = None
    kind: OperationKind = OperationKind.OTHER
    duration: float = 0.0
    finish_time: Optional[datetime] = None
    tags: Dict[str, Any] = field(default_factory=dict)
    context: Dict[str, Optional[str]] = field(
        default_factory=lambda: {'trace_id': None, 'span_id': None}
    )
    references: List[Tuple[str, str]] = field(default_factory=list)
    start_time: Optional[datetime] = None

    def __post_init__(self):
        merged = dict(self.tags)
        merged.update(DEFAULT_TAGS)
        self.tags = merged

    @property
    def id(self) -> Optional[str]:
        """Identifier for the span, unique within its trace."""
        return self.context['span_id']

    @property
    def trace_id(self) -> Optional[str]:
        return self.context['trace_id']

    @property
    def parent_id(self) -> Optional[str]:
        """Span id of the 'child_of' reference, if any."""
        for relationship, span_id in self.references:
            if relationship == 'child_of':
                return span_id
        return None

    def finish(self) -> None:
        """Compute the start time from the finish time and duration."""
        if self.finish_time is not None:
            self.start_time = self.finish_time - timedelta(seconds=self.duration)

    def __repr__(self) -> str:
        return f"Span({self.context['span_id']!r}, {self.name!r})"
