"""Benchmark execution.

Runs a callable through a warmup phase (discarded) and a measured phase,
timing each measured call with the monotonic ``time.perf_counter_ns`` clock.

The clock reads and the Python call add a small constant overhead to every
sample. It is not subtracted.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from benchd.stats import Statistics, collect_statistics

logger = logging.getLogger(__name__)


def _check_count(name: str, value: object, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class BenchmarkOptions:
    """Options controlling a benchmark run.

    Attributes:
        warmup_iterations: Calls made before timing starts.
        bench_iterations: Timed calls.
    """

    warmup_iterations: int = 10
    bench_iterations: int = 100

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise if the iteration counts are out of range."""
        _check_count("warmup_iterations", self.warmup_iterations, 0)
        _check_count("bench_iterations", self.bench_iterations, 1)

    def benchmark(
        self, func: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Statistics:
        """Benchmark ``func(*args, **kwargs)`` with these options."""
        return benchmark(self, func, *args, **kwargs)


def benchmark(
    options: BenchmarkOptions,
    func: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> Statistics:
    """Benchmark the execution time of a callable.

    Exceptions raised by ``func`` are not caught: they abort the run and
    reach the caller.

    Args:
        options: Iteration counts.
        func: The callable to time.
        *args: Positional arguments passed on every call.
        **kwargs: Keyword arguments passed on every call.

    Returns:
        Statistics over the measured calls.
    """
    options.validate()

    name = getattr(func, "__qualname__", repr(func))
    logger.debug(
        "Benchmarking %s: %d warmup, %d measured",
        name,
        options.warmup_iterations,
        options.bench_iterations,
    )

    for _ in range(options.warmup_iterations):
        func(*args, **kwargs)

    clock = time.perf_counter_ns
    run_times: list[int] = []
    for _ in range(options.bench_iterations):
        start = clock()
        func(*args, **kwargs)
        end = clock()
        run_times.append(end - start)

    stats = collect_statistics(run_times)
    logger.debug("Benchmarked %s: mean=%dns min=%dns", name, stats.mean, stats.min)
    return stats
