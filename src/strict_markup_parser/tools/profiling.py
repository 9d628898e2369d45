"""Performance profiling tools for strict markup parsing.

Times parse calls, samples resident memory through ``psutil`` and aggregates
the measurements into a report.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import psutil

from strict_markup_parser.api.parser import MarkupParser
from strict_markup_parser.shared import ParserConfig, ParserError, get_logger
from strict_markup_parser.tree import Element, Node


@dataclass
class ProfilingSession:
    """Measurements for one profiled parse."""

    session_id: str
    start_time: float
    end_time: float = 0.0
    input_size: int = 0  # bytes
    memory_start: int = 0  # bytes
    memory_end: int = 0  # bytes
    success: bool = False
    error_kind: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_duration_ms(self) -> float:
        """Total session duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        """Memory usage change in bytes."""
        return self.memory_end - self.memory_start

    @property
    def throughput_mb_per_s(self) -> float:
        """Processing throughput in MB/s."""
        duration_s = self.end_time - self.start_time
        if duration_s <= 0:
            return 0.0
        return (self.input_size / (1024 * 1024)) / duration_s

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "input_size": self.input_size,
            "total_duration_ms": self.total_duration_ms,
            "throughput_mb_s": self.throughput_mb_per_s,
            "memory_delta": self.memory_delta,
            "success": self.success,
            "error_kind": self.error_kind,
            "metadata": self.metadata,
        }


@dataclass
class PerformanceReport:
    """Aggregated view over profiling sessions."""

    sessions: List[ProfilingSession]
    generation_time: float

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    @property
    def failure_count(self) -> int:
        return sum(1 for session in self.sessions if not session.success)

    @property
    def average_duration_ms(self) -> float:
        if not self.sessions:
            return 0.0
        return sum(s.total_duration_ms for s in self.sessions) / len(self.sessions)

    @property
    def average_throughput_mb_per_s(self) -> float:
        if not self.sessions:
            return 0.0
        return sum(s.throughput_mb_per_s for s in self.sessions) / len(self.sessions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generation_time": self.generation_time,
            "summary": {
                "session_count": self.session_count,
                "failure_count": self.failure_count,
                "average_duration_ms": self.average_duration_ms,
                "average_throughput_mb_s": self.average_throughput_mb_per_s,
            },
            "sessions": [session.to_dict() for session in self.sessions],
        }


class PerformanceProfiler:
    """Profiler for parse operations.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> root = profiler.profile_parse('<div>content</div>', session_id='small')
        >>> profiler.generate_report().session_count
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        enable_memory_tracking: bool = True
    ) -> None:
        self.parser = MarkupParser(config)
        self.enable_memory_tracking = enable_memory_tracking
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, self.parser.correlation_id, "performance_profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def _memory_rss(self) -> int:
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def profile_parse(
        self,
        source: Union[str, bytes],
        session_id: Optional[str] = None
    ) -> Optional[Node]:
        """Parse ``source`` and record a profiling session.

        Parse errors are recorded on the session rather than raised.

        Returns:
            Root node, or None if the parse failed
        """
        raw = source.encode("utf-8") if isinstance(source, str) else source
        session = ProfilingSession(
            session_id=session_id or f"session_{len(self.sessions) + 1}",
            start_time=time.time(),
            input_size=len(raw),
            memory_start=self._memory_rss(),
        )

        root: Optional[Node] = None
        try:
            root = self.parser.parse(raw)
        except ParserError as e:
            session.error_kind = e.kind.name
            session.metadata["error"] = e.to_dict()
        else:
            session.success = True
            if isinstance(root, Element):
                session.metadata["max_depth"] = root.max_depth
                session.metadata["element_count"] = sum(1 for _ in root.iter_elements())
        finally:
            session.end_time = time.time()
            session.memory_end = self._memory_rss()
            self.sessions.append(session)

        self.logger.debug(
            "Recorded profiling session",
            extra={
                "session_id": session.session_id,
                "duration_ms": session.total_duration_ms,
                "memory_delta": session.memory_delta,
                "success": session.success,
            }
        )
        return root

    def generate_report(self) -> PerformanceReport:
        """Generate a report over all recorded sessions."""
        return PerformanceReport(sessions=self.sessions.copy(), generation_time=time.time())

    def save_report(self, report: PerformanceReport, output_path: Path) -> None:
        """Save performance report to a JSON file."""
        output_path.write_text(json.dumps(report.to_dict(), indent=2))

        self.logger.info(
            "Saved performance report",
            extra={"output_path": str(output_path), "session_count": report.session_count}
        )

    def clear_sessions(self) -> None:
        """Clear all stored profiling sessions."""
        session_count = len(self.sessions)
        self.sessions.clear()

        self.logger.info("Cleared profiling sessions", extra={"cleared_count": session_count})
