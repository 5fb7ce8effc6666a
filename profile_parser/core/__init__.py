"""Core components for profile parsing."""

from .errors import MalformedProfileLineError, ProfileParserError, UnsupportedFormatError
from .span import Span
from .trace import Trace
from .types import OperationKind, ParserConfig

__all__ = [
    "MalformedProfileLineError",
    "ProfileParserError",
    "UnsupportedFormatError",
    "Span",
    "Trace",
    "OperationKind",
    "ParserConfig",
]
