"""benchd: micro-benchmarking harness for Python callables.

Runs a callable through warmup and measured iterations, reduces the
per-call durations to summary statistics and serializes them to JSON:

    >>> from benchd import BenchmarkOptions, to_json_string
    >>> stats = BenchmarkOptions(warmup_iterations=5).benchmark(sorted, [3, 1, 2])
    >>> text = to_json_string(stats)
"""

from __future__ import annotations

from benchd.runner import BenchmarkOptions, benchmark
from benchd.serialize import (
    Scale,
    format_stats,
    parse_json_string,
    select_scale,
    to_json_string,
)
from benchd.stats import (
    Statistics,
    collect_statistics,
    mean_and_standard_deviation,
    median,
)

__all__ = [
    "BenchmarkOptions",
    "Scale",
    "Statistics",
    "benchmark",
    "collect_statistics",
    "format_stats",
    "mean_and_standard_deviation",
    "median",
    "parse_json_string",
    "select_scale",
    "to_json_string",
]
