"""Processors for log acquisition, trace assembly and aggregation."""

from .file_processor import LogFileProcessor
from .trace_assembler import TraceAssembler
from .kind_aggregator import KindAggregator

__all__ = [
    "LogFileProcessor",
    "TraceAssembler",
    "KindAggregator",
]
