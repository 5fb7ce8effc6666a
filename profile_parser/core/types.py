"""
Type definitions for profile parsing.
"""

from enum import Enum
from typing import TypedDict, List


class OperationKind(Enum):
    """Kind of operation measured by a PROFILE line."""
    FUNCTION_CALL = 'function_call'
    RESOURCE_EVAL = 'resource_eval'
    PUPPETDB_CALL = 'puppetdb_call'
    HTTP_REQUEST = 'http_request'
    OTHER = 'other'


class SummaryRow(TypedDict):
    """One itemized row of a per-kind summary table."""
    source: str
    time_ms: int


class KindSummary(TypedDict):
    """Exclusive time totals for one operation kind."""
    title: str
    kind: str
    total_time_ms: int
    rows: List[SummaryRow]


class ParserConfig:
    """Configuration for log parsing."""

    def __init__(
        self,
        profile_tag: str = 'PROFILE',
        verbose: bool = False
    ):
        """
        Initialize log parsing configuration.

        Args:
            profile_tag: Keyword identifying log lines that carry profiling data.
                         Lines without it are skipped before any regex matching,
                         and the line pattern expects it before the request id.
                         Default: 'PROFILE'

            verbose: If True, progress messages and the number of spans left
                     without a root are printed to stderr.
                     Default: False
        """
        self.profile_tag = profile_tag
        self.verbose = verbose
