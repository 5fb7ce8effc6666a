"""
Trace hierarchy built from dotted namespace paths.

Puppet labels each profiled operation with a namespace such as "1.2.3".
The number of segments gives the nesting depth and the last segment the
order among siblings. A Trace wraps one Span at one namespace and owns
the Traces nested below it.
"""

import uuid
from typing import Dict, Iterator, List, Optional

from .errors import MalformedProfileLineError
from .span import Span


class Trace:
    """
    Tree of Span objects representing a single profiled operation.

    - add(): place a Span at its namespace, creating intermediate nodes
      for ancestors that have not been seen yet.
    - iteration yields self followed by every nested Trace, depth-first,
      with children in the order they were created.
    - finalize(): compute timing statistics once all Spans are added.
    """

    def __init__(self, namespace: str, span: Optional[Span], trace_id: Optional[str] = None):
        """
        Initialize a Trace node.

        Args:
            namespace: Dotted sequence of integers giving depth and order
            span: Span measured at this namespace, or None for a node whose
                  span has not been parsed yet
            trace_id: Unique id shared by this trace and its children.
                      Defaults to a new UUID4.
        """
        self.namespace: List[str] = namespace.split('.')
        self.span = span
        self.trace_id = trace_id or str(uuid.uuid4())
        self._children: Dict[str, 'Trace'] = {}

        # Populated by finalize()
        self.inclusive_time: Optional[int] = None
        self.exclusive_time: Optional[int] = None
        self.stack: Optional[List[str]] = None
        self._finalized = False

    @property
    def path_id(self) -> str:
        return '.'.join(self.namespace)

    @property
    def depth(self) -> int:
        return len(self.namespace)

    @property
    def children(self) -> List['Trace']:
        return list(self._children.values())

    @property
    def finalized(self) -> bool:
        return self._finalized

    def add(self, namespace: str, span: Span) -> None:
        """
        Add a Span at the given namespace below this node.

        Spans may arrive in any order. Nodes for missing ancestors are
        created on the way down and receive their span when it arrives.
        Adding two spans at the same namespace keeps the last one.

        Args:
            namespace: Dotted namespace of the span
            span: Span to place in the hierarchy

        Raises:
            MalformedProfileLineError: If namespace is not this node or below it
        """
        parts = namespace.split('.')

        if parts[:len(self.namespace)] != self.namespace:
            raise MalformedProfileLineError(
                f"Span {namespace} does not belong below span {self.path_id}"
            )

        if parts == self.namespace:
            self.span = span
        elif parts[:-1] == self.namespace:
            self._get(parts[-1]).add(namespace, span)
        else:
            child_id = parts[len(self.namespace)]
            self._get(child_id).add(namespace, span)

    def __iter__(self) -> Iterator['Trace']:
        yield self
        for child in self._children.values():
            yield from child

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def finalize(self) -> None:
        """
        Compute summary statistics for the whole trace.

        Must be called after all spans have been added. Calling it again
        on a finalized trace does nothing.
        """
        if self._finalized:
            return
        self._finalize([], None)

    def _finalize(self, parent_stack: List[str], parent_span: Optional[Span]) -> None:
        if self.span is None:
            # Ancestor that was never logged
            self.span = Span(name=self.path_id)
            self.span.context['span_id'] = self.path_id

        self.stack = parent_stack + [self.span.name]

        for child in self._children.values():
            child._finalize(self.stack, self.span)

        # Integer conversion truncates toward zero
        self.inclusive_time = int(self.span.duration * 1000)

        child_time = sum(child.inclusive_time for child in self._children.values())
        self.exclusive_time = max(0, self.inclusive_time - child_time)

        self.span.context['trace_id'] = self.trace_id
        if parent_span is not None:
            self.span.references.append(('child_of', parent_span.id))
        self.span.finish()
        self._finalized = True

    def _get(self, child_id: str) -> 'Trace':
        """Get or create the child Trace with the given trailing segment."""
        if child_id not in self._children:
            self._children[child_id] = Trace(
                '.'.join(self.namespace + [child_id]), None, self.trace_id
            )
        return self._children[child_id]

    def __repr__(self) -> str:
        return f"Trace({self.path_id!r}, {self.span!r})"
