"""
Base class for output formats.
"""

from typing import IO, Iterable

from ..core.trace import Trace


class Formatter:
    """Renders a list of finalized traces and writes them to an output stream."""

    def __init__(self, output: IO):
        """
        Args:
            output: Text stream written to by write()
        """
        self.output = output

    def write(self, traces: Iterable[Trace]) -> None:
        """
        Format traces and write them to the output.

        Args:
            traces: Finalized Trace instances in completion order
        """
        raise NotImplementedError(f"{type(self).__name__} is an abstract class.")
