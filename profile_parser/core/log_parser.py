"""
Top-level parser that reconstructs traces from Puppet Server logs.
"""

import sys
from collections import defaultdict
from contextlib import closing
from typing import DefaultDict, List, Optional

from ..core.trace import Trace
from ..core.types import ParserConfig
from ..extractors import LogLineExtractor, MessageClassifier
from ..extractors.log_line_extractor import build_parser
from ..processors import LogFileProcessor, TraceAssembler
from ..processors.file_processor import LogSource


class LogParser:
    """
    Main orchestrator for PROFILE log parsing.

    Lines from many requests interleave in a Puppet Server log because
    each worker thread logs its operations as they complete. The parser
    keeps one TraceAssembler per thread id and collects the traces they
    complete, in completion order.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        """
        Initialize the LogParser.

        Args:
            config: ParserConfig instance, defaults are used when omitted
        """
        self.config = config or ParserConfig()

        # Completed traces
        self.traces: List[Trace] = []
        # Open profiles, keyed by the thread id recorded in the log
        self.trace_assemblers: DefaultDict[str, TraceAssembler] = defaultdict(TraceAssembler)

        # Initialize components
        self.line_extractor = LogLineExtractor(build_parser(self.config.profile_tag))
        self.message_classifier = MessageClassifier()
        self.file_processor = LogFileProcessor()

    def parse_file(self, source: LogSource) -> None:
        """
        Parse traces from a log file.

        Args:
            source: Path to the log file, or an open file object. Paths
                    ending in '.gz' are decompressed. The file is closed
                    once parsing finishes or fails.
        """
        trace_count = len(self.traces)
        lines = self.file_processor.iter_lines(
            source,
            profile_tag=self.config.profile_tag,
            verbose=self.config.verbose
        )
        with closing(lines):
            for line in lines:
                self.parse_line(line)

        if self.config.verbose:
            print(f"Found {len(self.traces) - trace_count} complete traces, "
                  f"{self.pending_spans} spans waiting for a root.", file=sys.stderr)

    def parse_line(self, line: str) -> Optional[Trace]:
        """
        Parse a single log line.

        Args:
            line: Raw log line

        Returns:
            Finalized Trace if the line completed a profile, otherwise None
        """
        data = self.line_extractor.extract(line)
        if data is None:
            print(f"WARN Could not parse log line: {line.rstrip()}", file=sys.stderr)
            return None

        message = data.pop('message')
        span = self.message_classifier.classify(message, data)
        if span is None:
            print(f"WARN Could not parse PROFILE message: {message.rstrip()}", file=sys.stderr)
            return None

        result = self.trace_assemblers[data['thread_id']].submit(span)

        # Assemblers return None until a profile is complete
        if result is not None:
            self.traces.append(result)
        return result

    @property
    def pending_spans(self) -> int:
        """Number of spans buffered in profiles that have not seen a root."""
        return sum(a.pending for a in self.trace_assemblers.values())
