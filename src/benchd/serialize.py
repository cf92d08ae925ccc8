"""JSON serialization of benchmark statistics.

The output is a compact JSON object tagged with a ``scale`` key naming the
display unit chosen from the shortest sample::

    {"scale":"usecs","runs":[1500000,2500000,3500000],"max":3500000,
     "min":1500000,"mean":2500000,"median":2500000,"stdDev":816496.580927726}

Every field is the tick value multiplied by the scale factor, so dividing by
the factor of the declared scale gives back the ticks exactly.
"""

from __future__ import annotations

import json
from enum import Enum

from benchd.stats import Statistics

# Ticks are nanoseconds.
_FACTORS = {
    "seconds": 1_000_000_000,
    "msecs": 1_000_000,
    "usecs": 1_000,
    "nsecs": 1,
}

_INT_FIELDS = ("max", "min", "mean", "median")


class Scale(Enum):
    """Display time unit. The value is the tag written to ``scale``."""

    SECONDS = "seconds"
    MSECS = "msecs"
    USECS = "usecs"
    NSECS = "nsecs"

    @property
    def factor(self) -> int:
        """Ticks per unit."""
        return _FACTORS[self.value]


def select_scale(stats: Statistics) -> Scale:
    """Pick the coarsest unit in which the shortest sample is at least 1."""
    for scale in (Scale.SECONDS, Scale.MSECS, Scale.USECS):
        if stats.min >= scale.factor:
            return scale
    return Scale.NSECS


def to_dict(stats: Statistics, scale: Scale | None = None) -> dict:
    """Convert statistics to a JSON-ready dict tagged with the given (or chosen) unit."""
    if scale is None:
        scale = select_scale(stats)
    factor = scale.factor

    return {
        "scale": scale.value,
        "runs": [t * factor for t in stats.run_times],
        "max": stats.max * factor,
        "min": stats.min * factor,
        "mean": stats.mean * factor,
        "median": stats.median * factor,
        "stdDev": stats.std_dev * factor,
    }


def to_json_string(stats: Statistics, scale: Scale | None = None) -> str:
    """Serialize statistics to a compact JSON string.

    Integer fields are scaled by exact integer multiplication, so the
    transcription is lossless whatever the scale.

    Args:
        stats: Statistics produced by ``collect_statistics``.
        scale: Display unit; chosen with ``select_scale`` when omitted.

    Returns:
        JSON text.
    """
    return json.dumps(to_dict(stats, scale), separators=(",", ":"))


def _to_ticks(key: str, value: object, factor: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key!r} must be an integer, got {value!r}")
    ticks, remainder = divmod(value, factor)
    if remainder:
        raise ValueError(f"{key!r} value {value} is not a multiple of {factor}")
    return ticks


def parse_json_string(text: str) -> Statistics:
    """Read ``to_json_string`` output back into ticks.

    Args:
        text: JSON text.

    Returns:
        Statistics with every field divided back by the scale factor.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Statistics JSON must be an object")

    missing = [k for k in ("scale", "runs", *_INT_FIELDS, "stdDev") if k not in data]
    if missing:
        raise ValueError(f"Missing key(s) in statistics JSON: {', '.join(missing)}")

    factor = Scale(data["scale"]).factor

    runs = data["runs"]
    if not isinstance(runs, list):
        raise ValueError(f"'runs' must be a list, got {runs!r}")

    std_dev = data["stdDev"]
    if isinstance(std_dev, bool) or not isinstance(std_dev, (int, float)):
        raise ValueError(f"'stdDev' must be a number, got {std_dev!r}")

    fields = {k: _to_ticks(k, data[k], factor) for k in _INT_FIELDS}
    return Statistics(
        run_times=tuple(_to_ticks("runs", t, factor) for t in runs),
        std_dev=std_dev / factor,
        **fields,
    )


def format_stats(stats: Statistics, scale: Scale | None = None) -> str:
    """Format statistics for display.

    Returns:
        A line like "12.3usecs +/- 0.4usecs (median 12, min 11, max 15, 100 runs)".
    """
    if scale is None:
        scale = select_scale(stats)
    factor = scale.factor
    unit = scale.value

    mean = stats.mean / factor
    std_dev = stats.std_dev / factor
    return (
        f"{mean:.1f}{unit} +/- {std_dev:.1f}{unit} "
        f"(median {stats.median // factor}, min {stats.min // factor}, "
        f"max {stats.max // factor}, {len(stats.run_times)} runs)"
    )
