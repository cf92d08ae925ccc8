"""Statistical reduction of benchmark samples.

Samples are integer nanosecond counts (ticks) as returned by
``time.perf_counter_ns``. All reductions stay in integer arithmetic until
the final square root so no precision is lost to float conversion.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Statistics:
    """Statistical summary of one benchmark run.

    Attributes:
        run_times: Raw sample durations in ticks, in execution order.
        max: Longest sample.
        min: Shortest sample.
        mean: Arithmetic mean, floor-divided to whole ticks.
        median: Median of the sorted samples, floor-divided for even counts.
        std_dev: Population standard deviation in ticks.
    """

    run_times: tuple[int, ...]
    max: int
    min: int
    mean: int
    median: int
    std_dev: float

    def __post_init__(self) -> None:
        if not self.run_times:
            raise ValueError("Statistics require at least one run time")


def mean_and_standard_deviation(samples: Sequence[int]) -> tuple[int, float]:
    """Compute the mean and population standard deviation in one pass.

    Accumulates the sum and the sum of squares. The variance is taken from
    the exact integer sums as ``(n * sum_sq - total**2) / n**2``, which is
    ``sum_sq / n - (total / n)**2`` without the cancellation error.

    Args:
        samples: Non-empty sequence of durations in ticks.

    Returns:
        Tuple of (mean, standard deviation).
    """
    n = len(samples)
    if n == 0:
        raise ValueError("Cannot compute the mean of zero samples")

    total = 0
    sum_sq = 0
    for x in samples:
        total += x
        sum_sq += x * x

    mean = total // n
    variance = (n * sum_sq - total * total) / (n * n)
    return mean, math.sqrt(variance)


def median(samples: Sequence[int]) -> int:
    """Median of the samples, using floor division for even counts.

    Args:
        samples: Non-empty sequence of durations in ticks. Not modified.

    Returns:
        The middle element, or the floored mean of the two middle elements.
    """
    n = len(samples)
    if n == 0:
        raise ValueError("Cannot compute the median of zero samples")

    ordered = sorted(samples)
    mid = n // 2
    if n % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) // 2


def collect_statistics(samples: Iterable[int]) -> Statistics:
    """Reduce raw samples into a Statistics record.

    Args:
        samples: Non-empty iterable of durations in ticks, in execution order.

    Returns:
        Statistics computed over exactly these samples.
    """
    run_times = tuple(samples)
    if not run_times:
        raise ValueError("collect_statistics requires at least one sample")

    longest = shortest = run_times[0]
    for t in run_times[1:]:
        if t > longest:
            longest = t
        elif t < shortest:
            shortest = t

    mean, std_dev = mean_and_standard_deviation(run_times)

    return Statistics(
        run_times=run_times,
        max=longest,
        min=shortest,
        mean=mean,
        median=median(run_times),
        std_dev=std_dev,
    )
