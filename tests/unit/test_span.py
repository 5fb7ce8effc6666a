"""
Unit tests for profile_parser.core.span module.
"""
from datetime import datetime

import pytest
from profile_parser.core.span import Span
from profile_parser.core.types import OperationKind


class TestSpan:
    """Tests for the Span class."""

    def test_default_tags_are_added(self):
        """Test that every span is tagged as a puppetserver server span."""
        span = Span(name="Called include", tags={"puppet.op_type": "function_call"})

        assert span.tags == {
            "puppet.op_type": "function_call",
            "component": "puppetserver",
            "span.kind": "server",
        }

    def test_defaults(self):
        """Test the state of a span before it is finalized."""
        span = Span(name="something")

        assert span.kind is OperationKind.OTHER
        assert span.id is None
        assert span.trace_id is None
        assert span.parent_id is None
        assert span.references == []

    def test_tag_dicts_are_not_shared(self):
        """Test that spans do not share mutable defaults."""
        first, second = Span(), Span()
        first.tags["extra"] = "value"
        first.context["span_id"] = "1"

        assert "extra" not in second.tags
        assert second.id is None

    def test_parent_id_uses_child_of_reference(self):
        """Test that only child_of references count as parents."""
        span = Span()
        span.references.append(("follows_from", "1.1"))
        span.references.append(("child_of", "1"))

        assert span.parent_id == "1"

    def test_finish_computes_start_time(self):
        """Test that finish() subtracts the duration from the finish time."""
        span = Span(duration=0.25, finish_time=datetime(2018, 1, 1, 12, 0, 1))
        span.finish()

        assert span.start_time == datetime(2018, 1, 1, 12, 0, 0, 750000)

    def test_finish_without_finish_time(self):
        """Test that finish() leaves start_time unset without a timestamp."""
        span = Span(duration=0.25)
        span.finish()

        assert span.start_time is None
