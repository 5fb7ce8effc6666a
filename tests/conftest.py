"""
Pytest configuration and shared fixtures for profile parser tests.
"""
import gzip
import pytest

from profile_parser.core.span import Span
from profile_parser.core.types import OperationKind


def make_log_line(thread_id, span_id, operation, duration,
                  timestamp="2018-02-18 18:43:53,501", request_id="39776666"):
    """Build a Puppet Server PROFILE log line in the default logback layout."""
    return (f"{timestamp} INFO  [{thread_id}] [puppetserver] Puppet PROFILE "
            f"[{request_id}] {span_id} {operation}: took {duration} seconds\n")


def make_span(span_id, duration, name=None, kind=OperationKind.OTHER, tags=None,
              finish_time=None):
    """Build a Span the way the message classifier does."""
    span = Span(name=name or f"op {span_id}", kind=kind, duration=duration,
                finish_time=finish_time, tags=tags or {})
    span.context['span_id'] = span_id
    return span


@pytest.fixture
def log_line():
    """Helper to build PROFILE log lines."""
    return make_log_line


@pytest.fixture
def span_factory():
    """Helper to build spans."""
    return make_span


@pytest.fixture
def interleaved_lines():
    """Two profiles from two threads, children logged before their root."""
    return [
        make_log_line("qtp1-1", "1.1", "Called include", "0.5000",
                      timestamp="2018-02-18 18:43:52,500", request_id="100"),
        make_log_line("qtp1-2", "1.1", "Called include", "0.5000",
                      timestamp="2018-02-18 18:43:52,510", request_id="200"),
        make_log_line("qtp1-1", "1.2", "Evaluated resource File[/etc/motd]", "0.7500",
                      timestamp="2018-02-18 18:43:53,250", request_id="100"),
        make_log_line("qtp1-2", "1.2", "PuppetDB: facts command", "0.7500",
                      timestamp="2018-02-18 18:43:53,260", request_id="200"),
        make_log_line("qtp1-1", "1", "Processed request GET /puppet/v3/catalog/agent01.example.com",
                      "1.5000", timestamp="2018-02-18 18:43:53,501", request_id="100"),
        make_log_line("qtp1-2", "1", "Processed request POST /puppet/v3/report/",
                      "1.5000", timestamp="2018-02-18 18:43:53,511", request_id="200"),
    ]


@pytest.fixture
def sample_log_file(tmp_path, interleaved_lines):
    """Plain text log with non-PROFILE noise around the profiling lines."""
    log_file = tmp_path / "puppetserver.log"
    lines = ["2018-02-18 18:43:50,000 INFO  [main] [puppetserver] Puppet Server started\n"]
    lines += interleaved_lines
    lines.append("2018-02-18 18:43:54,000 INFO  [qtp1-1] [puppetserver] Compiled catalog\n")
    log_file.write_text("".join(lines))
    return str(log_file)


@pytest.fixture
def sample_gz_file(tmp_path, interleaved_lines):
    """Gzip compressed copy of the interleaved profiles."""
    log_file = tmp_path / "puppetserver.log.gz"
    with gzip.open(log_file, "wt") as f:
        f.write("".join(interleaved_lines))
    return str(log_file)


@pytest.fixture
def parsed_traces(interleaved_lines):
    """Finalized traces for the interleaved profiles."""
    from profile_parser import LogParser
    parser = LogParser()
    for line in interleaved_lines:
        parser.parse_line(line)
    return parser.traces
