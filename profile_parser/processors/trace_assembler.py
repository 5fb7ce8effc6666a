"""
Per-thread assembly of spans into traces.
"""

from typing import List, Optional

from ..core.span import Span
from ..core.trace import Trace

ROOT_SPAN_ID = '1'


class TraceAssembler:
    """
    Collects the spans logged by one server thread until a profile completes.

    Puppet logs the root of a profile (span id '1') after all of its
    children, so every span buffered since the previous root belongs to
    the profile closed by the next root.
    """

    def __init__(self):
        self.spans: List[Span] = []

    def submit(self, span: Span) -> Optional[Trace]:
        """
        Add a span, possibly completing a trace.

        Args:
            span: Span parsed from a PROFILE line of this thread

        Returns:
            Finalized Trace when span is the root of a profile, otherwise
            None while the profile is still open
        """
        if span.id != ROOT_SPAN_ID:
            self.spans.append(span)
            return None

        trace = Trace(ROOT_SPAN_ID, span)
        for child in self.spans:
            trace.add(child.id, child)

        # Re-set for the next profile on this thread
        self.spans = []

        trace.finalize()
        return trace

    @property
    def pending(self) -> int:
        """Number of spans waiting for their root."""
        return len(self.spans)
