"""Benchmark suite configuration.

A suite is a YAML file listing callables to benchmark by import path::

    name: string-ops
    warmup_iterations: 5
    bench_iterations: 200
    benchmarks:
      - name: join
        target: "mypkg.strings:join_words"
        args: [["a", "b", "c"]]
        bench_iterations: 50
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from benchd.runner import BenchmarkOptions


@dataclass
class BenchmarkConfig:
    """Configuration for a single benchmark.

    Attributes:
        name: Benchmark identifier.
        target: Import path of the callable, as "module:attribute".
        options: Iteration counts for this benchmark.
        args: Positional arguments passed to the callable.
        kwargs: Keyword arguments passed to the callable.
        enabled: Whether benchmark is enabled.
    """

    name: str
    target: str
    options: BenchmarkOptions
    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)
    enabled: bool = True


@dataclass
class BenchmarkSuite:
    """Collection of benchmark configurations.

    Attributes:
        name: Suite name.
        benchmarks: List of benchmark configurations.
        options: Suite-wide default iteration counts.
    """

    name: str
    benchmarks: list[BenchmarkConfig]
    options: BenchmarkOptions = field(default_factory=BenchmarkOptions)


def resolve_target(target: str) -> Callable[..., Any]:
    """Import a callable from a "module:attribute" path.

    The attribute part may be dotted ("module:Class.method").
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Target must look like 'module:attribute', got {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ValueError(f"{module_name!r} has no attribute {attr_path!r}") from e

    if not callable(obj):
        raise ValueError(f"Target {target!r} is not callable")
    return obj


def _options_from(data: dict, defaults: BenchmarkOptions) -> BenchmarkOptions:
    return BenchmarkOptions(
        warmup_iterations=data.get("warmup_iterations", defaults.warmup_iterations),
        bench_iterations=data.get("bench_iterations", defaults.bench_iterations),
    )


def load_suite_config(config_path: Path | str) -> BenchmarkSuite:
    """Load benchmark suite configuration from YAML.

    Args:
        config_path: Path to the suite file.

    Returns:
        BenchmarkSuite configuration.
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ValueError(f"Suite configuration not found: {config_path}")

    with config_path.open() as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: top level must be a mapping")

    try:
        suite_options = _options_from(data, BenchmarkOptions())
    except (TypeError, ValueError) as e:
        raise ValueError(f"{config_path}: {e}") from e

    benchmarks = []
    for i, bench_data in enumerate(data.get("benchmarks") or []):
        if not isinstance(bench_data, dict) or "target" not in bench_data:
            raise ValueError(f"{config_path}: benchmark #{i} needs a 'target'")

        name = bench_data.get("name", bench_data["target"])
        try:
            options = _options_from(bench_data, suite_options)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{config_path}: benchmark {name!r}: {e}") from e

        args = bench_data.get("args") or []
        kwargs = bench_data.get("kwargs") or {}
        if not isinstance(args, list) or not isinstance(kwargs, dict):
            raise ValueError(
                f"{config_path}: benchmark {name!r}: 'args' must be a list "
                "and 'kwargs' a mapping"
            )

        enabled = bench_data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError(
                f"{config_path}: benchmark {name!r}: 'enabled' must be true or false, "
                f"got {enabled!r}"
            )

        benchmarks.append(
            BenchmarkConfig(
                name=name,
                target=bench_data["target"],
                options=options,
                args=args,
                kwargs=kwargs,
                enabled=enabled,
            )
        )

    return BenchmarkSuite(
        name=data.get("name", config_path.stem),
        benchmarks=benchmarks,
        options=suite_options,
    )
