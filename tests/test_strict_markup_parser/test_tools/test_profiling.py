"""Tests for the performance profiling tools."""

import json

from strict_markup_parser.shared import ParserConfig
from strict_markup_parser.tools.profiling import (
    PerformanceProfiler,
    PerformanceReport,
    ProfilingSession,
)
from strict_markup_parser.tree import Element, Text


class TestProfilingSession:

    def test_derived_metrics(self):
        session = ProfilingSession(
            session_id="s",
            start_time=10.0,
            end_time=12.0,
            input_size=2 * 1024 * 1024,
            memory_start=100,
            memory_end=150,
        )

        assert session.total_duration_ms == 2000.0
        assert session.throughput_mb_per_s == 1.0
        assert session.memory_delta == 50

    def test_zero_duration_throughput(self):
        session = ProfilingSession(session_id="s", start_time=1.0, end_time=1.0)

        assert session.throughput_mb_per_s == 0.0


class TestPerformanceReport:

    def test_empty_report(self):
        report = PerformanceReport(sessions=[], generation_time=0.0)

        assert report.session_count == 0
        assert report.average_duration_ms == 0.0
        assert report.average_throughput_mb_per_s == 0.0


class TestPerformanceProfiler:

    def test_profile_successful_parse(self):
        profiler = PerformanceProfiler()

        root = profiler.profile_parse("<div><p>x</p></div>", session_id="ok")

        assert root == Element("div", {}, [Element("p", {}, [Text("x")])])
        session = profiler.sessions[0]
        assert session.session_id == "ok"
        assert session.success
        assert session.input_size == len("<div><p>x</p></div>")
        assert session.metadata["max_depth"] == 2
        assert session.metadata["element_count"] == 2
        assert session.memory_start > 0

    def test_profile_failed_parse(self):
        profiler = PerformanceProfiler()

        root = profiler.profile_parse("<div>")

        assert root is None
        session = profiler.sessions[0]
        assert session.session_id == "session_1"
        assert not session.success
        assert session.error_kind == "PREMATURE_END_OF_FILE"
        assert profiler.generate_report().failure_count == 1

    def test_memory_tracking_can_be_disabled(self):
        profiler = PerformanceProfiler(enable_memory_tracking=False)

        profiler.profile_parse("<a></a>")

        assert profiler.sessions[0].memory_start == 0
        assert profiler.sessions[0].memory_end == 0

    def test_uses_given_configuration(self):
        profiler = PerformanceProfiler(ParserConfig(allow_text_root=True))

        assert profiler.profile_parse("text") == Text("text")

    def test_report_and_save(self, tmp_path):
        profiler = PerformanceProfiler()
        profiler.profile_parse("<a>1</a>")
        profiler.profile_parse("<b>2</b>")

        report = profiler.generate_report()
        output = tmp_path / "report.json"
        profiler.save_report(report, output)

        data = json.loads(output.read_text())
        assert report.session_count == 2
        assert data["summary"]["session_count"] == 2
        assert [s["session_id"] for s in data["sessions"]] == ["session_1", "session_2"]

    def test_clear_sessions(self):
        profiler = PerformanceProfiler()
        profiler.profile_parse("<a></a>")

        profiler.clear_sessions()

        assert profiler.sessions == []
