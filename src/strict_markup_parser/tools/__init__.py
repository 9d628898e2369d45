"""Developer tools for strict markup parsing."""

from .profiling import PerformanceProfiler, PerformanceReport, ProfilingSession

__all__ = [
    "PerformanceProfiler",
    "PerformanceReport",
    "ProfilingSession",
]
