"""
Unit tests for profile_parser.core.log_parser module.
"""
import io

import pytest
from profile_parser import LogParser, ParserConfig
from profile_parser.core.errors import MalformedProfileLineError
from profile_parser.core.types import OperationKind


class TestParseLine:
    """Tests for the parse_line method."""

    def test_interleaved_profiles(self, interleaved_lines):
        """Test that interleaved threads produce one trace each."""
        parser = LogParser()
        results = [parser.parse_line(line) for line in interleaved_lines]

        assert results[:4] == [None, None, None, None]
        assert results[4:] == parser.traces
        assert len(parser.traces) == 2

        for trace in parser.traces:
            assert trace.inclusive_time == 1500
            assert trace.exclusive_time == 1500 - 500 - 750
            assert [c.inclusive_time for c in trace.children] == [500, 750]

    def test_traces_keep_their_thread(self, interleaved_lines):
        """Test that spans are not mixed between threads."""
        parser = LogParser()
        for line in interleaved_lines:
            parser.parse_line(line)

        first, second = parser.traces
        assert first.span.name == "/puppet/v3/catalog/"
        assert [c.span.kind for c in first.children] == [
            OperationKind.FUNCTION_CALL, OperationKind.RESOURCE_EVAL
        ]
        assert second.span.tags["http.method"] == "POST"
        assert [c.span.kind for c in second.children] == [
            OperationKind.FUNCTION_CALL, OperationKind.PUPPETDB_CALL
        ]

    def test_one_assembler_per_thread(self, interleaved_lines):
        parser = LogParser()
        for line in interleaved_lines:
            parser.parse_line(line)

        assert sorted(parser.trace_assemblers) == ["qtp1-1", "qtp1-2"]

    def test_unparseable_line_warns(self, capsys):
        """Test that lines outside the log layout are skipped with a warning."""
        parser = LogParser()
        assert parser.parse_line("garbage PROFILE line\n") is None

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "WARN Could not parse log line: garbage PROFILE line" in captured.err
        assert parser.traces == []

    def test_unparseable_message_warns(self, capsys):
        """Test that PROFILE messages without a duration are skipped."""
        parser = LogParser()
        line = ("2018-02-18 18:43:53,501 INFO  [qtp1-1] [puppetserver] "
                "Puppet PROFILE [1] 1 Compiled catalog\n")
        assert parser.parse_line(line) is None

        assert "WARN Could not parse PROFILE message: 1 Compiled catalog" in capsys.readouterr().err
        assert parser.pending_spans == 0

    def test_pending_spans(self, log_line):
        """Test that truncated profiles are counted but never returned."""
        parser = LogParser()
        parser.parse_line(log_line("qtp1-1", "1.1", "Called include", "0.1000"))
        parser.parse_line(log_line("qtp1-2", "1.1", "Called include", "0.1000"))

        assert parser.traces == []
        assert parser.pending_spans == 2

    def test_malformed_timestamp_raises(self, log_line):
        parser = LogParser()
        with pytest.raises(MalformedProfileLineError):
            parser.parse_line(log_line("qtp1-1", "1", "Called include", "0.1000",
                                       timestamp="2018-02-31 10:00:00,000"))


class TestParseFile:
    """Tests for the parse_file method."""

    def test_plain_file(self, sample_log_file, capsys):
        """Test that non-PROFILE lines are ignored without warnings."""
        parser = LogParser()
        parser.parse_file(sample_log_file)

        assert len(parser.traces) == 2
        assert capsys.readouterr().err == ""

    def test_gzip_file(self, sample_gz_file):
        parser = LogParser()
        parser.parse_file(sample_gz_file)

        assert len(parser.traces) == 2
        assert parser.traces[0].inclusive_time == 1500

    def test_file_object_is_closed(self, interleaved_lines):
        log = io.StringIO("".join(interleaved_lines))
        parser = LogParser()
        parser.parse_file(log)

        assert log.closed
        assert len(parser.traces) == 2

    def test_file_closed_on_error(self, log_line):
        """Test that the log is closed when a line aborts parsing."""
        log = io.StringIO(log_line("qtp1-1", "1", "Called include", "0.1000",
                                   timestamp="2018-02-31 10:00:00,000"))
        parser = LogParser()
        with pytest.raises(MalformedProfileLineError):
            parser.parse_file(log)

        assert log.closed

    def test_profiles_continue_across_files(self, tmp_path, log_line):
        """Test that a profile split over rotated logs is still completed."""
        first = tmp_path / "puppetserver-1.log"
        second = tmp_path / "puppetserver-2.log"
        first.write_text(log_line("qtp1-1", "1.1", "Called include", "0.2500"))
        second.write_text(log_line("qtp1-1", "1", "Called main", "1.0000"))

        parser = LogParser()
        parser.parse_file(str(first))
        parser.parse_file(str(second))

        assert len(parser.traces) == 1
        assert parser.traces[0].exclusive_time == 750

    def test_verbose_progress(self, sample_log_file, capsys):
        parser = LogParser(ParserConfig(verbose=True))
        parser.parse_file(sample_log_file)

        err = capsys.readouterr().err
        assert f"Processing {sample_log_file}..." in err
        assert "Found 2 complete traces, 0 spans waiting for a root." in err

    def test_custom_profile_tag(self, capsys):
        """Test that a non-default tag is used for filtering and parsing."""
        log = io.StringIO(
            "2018-02-18 18:43:53,501 INFO  [qtp1-1] [puppetserver] "
            "Puppet TIMING [1] 1 Called foo: took 0.1000 seconds\n"
            "2018-02-18 18:43:53,502 INFO  [qtp1-1] [puppetserver] "
            "Puppet PROFILE [2] 1 Called bar: took 0.1000 seconds\n"
        )
        parser = LogParser(ParserConfig(profile_tag="TIMING"))
        parser.parse_file(log)

        assert len(parser.traces) == 1
        assert parser.traces[0].span.name == "foo"
        assert capsys.readouterr().err == ""

    def test_span_outside_root_aborts(self, log_line):
        """Test that a profile with a span not under "1" is reported by path."""
        log = io.StringIO(log_line("qtp1-1", "2", "Called include", "0.1000")
                          + log_line("qtp1-1", "1", "Called main", "1.0000"))
        parser = LogParser()

        with pytest.raises(MalformedProfileLineError, match="Span 2 does not belong"):
            parser.parse_file(log)
        assert log.closed
