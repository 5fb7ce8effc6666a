"""Data extraction utilities for Puppet Server log lines."""

from .log_line_extractor import LogLineExtractor
from .message_classifier import MessageClassifier

__all__ = ["LogLineExtractor", "MessageClassifier"]
