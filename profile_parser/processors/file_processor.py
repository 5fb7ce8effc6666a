"""
Log file acquisition with transparent gzip support.
"""

import gzip
import os
import sys
from typing import IO, Iterator, List, Union

LogSource = Union[str, os.PathLike, IO]


class LogFileProcessor:
    """Opens Puppet Server log files and yields PROFILE lines."""

    @staticmethod
    def expand_paths(raw_paths: List[str]) -> List[str]:
        """
        Validate that every log file exists.

        A path given twice is parsed twice.

        Args:
            raw_paths: Paths given on the command line

        Returns:
            List of paths in input order

        Raises:
            FileNotFoundError: If a path does not exist or no paths were given
        """
        expanded = []

        for raw in raw_paths:
            if not os.path.isfile(raw):
                raise FileNotFoundError(f"File not found: {raw}")
            expanded.append(raw)

        if not expanded:
            raise FileNotFoundError("No log files given")

        return expanded

    @staticmethod
    def open_log(source: LogSource) -> IO:
        """
        Open a log for reading.

        Args:
            source: Path to a log file, or an already open file object.
                    Paths ending in '.gz' are decompressed while reading.

        Returns:
            File object yielding lines
        """
        if hasattr(source, 'read'):
            return source

        if os.fspath(source).endswith('.gz'):
            return gzip.open(source, 'rt', encoding='utf-8', errors='replace')
        return open(source, 'r', encoding='utf-8', errors='replace')

    def iter_lines(self, source: LogSource, profile_tag: str = 'PROFILE',
                   verbose: bool = False) -> Iterator[str]:
        """
        Yield lines containing profile_tag from a log.

        The log is closed once iteration ends, including when the
        consumer raises.

        Args:
            source: Path or open file object
            profile_tag: Keyword a line must contain to be yielded
            verbose: Print progress to stderr

        Yields:
            Decoded log lines
        """
        name = getattr(source, 'name', source)
        if verbose:
            print(f"Processing {name}...", file=sys.stderr)

        io = self.open_log(source)
        line_count = 0
        try:
            for line in io:
                if isinstance(line, bytes):
                    line = line.decode('utf-8', errors='replace')
                line_count += 1
                if profile_tag in line:
                    yield line
        finally:
            io.close()

        if verbose:
            print(f"Completed reading {name}: {line_count} lines.", file=sys.stderr)
