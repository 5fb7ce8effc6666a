"""
Exceptions raised while parsing PROFILE logs.
"""


class ProfileParserError(Exception):
    """Base class for errors raised by the profile parser."""


class MalformedProfileLineError(ProfileParserError, ValueError):
    """A log line matched the expected layout but a field could not be converted."""

    def __init__(self, message: str, line: str = ''):
        super().__init__(message)
        self.line = line


class UnsupportedFormatError(ProfileParserError, ValueError):
    """The requested output format is not one of the known formats."""
