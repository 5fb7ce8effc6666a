"""
Puppet Profile Parser - Reconstruct traces from Puppet Server PROFILE logs
"""

__version__ = "0.2.0"

from .core.log_parser import LogParser
from .core.span import Span
from .core.trace import Trace
from .core.types import OperationKind, ParserConfig

__all__ = ["LogParser", "Span", "Trace", "OperationKind", "ParserConfig"]
