"""Output formats for finalized traces."""

from typing import IO

from ..core.errors import UnsupportedFormatError
from .base import Formatter
from .csv_formatter import CsvFormatter
from .flamegraph_formatter import FlameGraphFormatter
from .human_formatter import HumanFormatter
from .zipkin_formatter import ZipkinFormatter
from .time_formatter import format_time, format_timestamp

FORMATS = ['human', 'csv', 'flamegraph', 'zipkin']


def get_formatter(output_format: str, output: IO, use_color: bool = False) -> Formatter:
    """
    Factory that returns the formatter for an output format name.

    Args:
        output_format: One of FORMATS
        output: Text stream the formatter writes to
        use_color: Colorize output, only used by the human format

    Returns:
        Formatter instance

    Raises:
        UnsupportedFormatError: If output_format is unknown
    """
    if output_format == 'csv':
        return CsvFormatter(output)
    if output_format == 'flamegraph':
        return FlameGraphFormatter(output)
    if output_format == 'zipkin':
        return ZipkinFormatter(output)
    if output_format == 'human':
        return HumanFormatter(output, use_color)
    raise UnsupportedFormatError(
        f"{output_format} is not a supported output format. See --help for details."
    )


__all__ = [
    "FORMATS",
    "Formatter",
    "CsvFormatter",
    "FlameGraphFormatter",
    "HumanFormatter",
    "ZipkinFormatter",
    "get_formatter",
    "format_time",
    "format_timestamp",
]
