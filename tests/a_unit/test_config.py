"""Unit tests for benchd.config module."""

from __future__ import annotations

import os.path
from pathlib import Path

import pytest

from benchd.config import load_suite_config, resolve_target
from benchd.runner import BenchmarkOptions

SUITE = """\
name: sorting
warmup_iterations: 3
bench_iterations: 20
benchmarks:
  - name: sort-small
    target: "builtins:sorted"
    args: [[3, 1, 2]]
  - name: sort-reverse
    target: "builtins:sorted"
    args: [[1, 2, 3]]
    kwargs: {reverse: true}
    bench_iterations: 5
  - target: "os.path:join"
    args: ["a", "b"]
    enabled: false
"""


def write_suite(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "suite.yaml"
    path.write_text(text)
    return path


class TestResolveTarget:
    """Tests for resolve_target function."""

    def test_module_function(self) -> None:
        """Test a plain module attribute."""
        assert resolve_target("os.path:join") is os.path.join

    def test_dotted_attribute(self) -> None:
        """Test a nested attribute such as a class method."""
        assert resolve_target("builtins:dict.fromkeys") == dict.fromkeys

    @pytest.mark.parametrize(
        "target",
        [
            "os.path.join",
            ":join",
            "os.path:",
            "benchd_no_such_module:func",
            "os.path:no_such_function",
            "math:pi",
        ],
    )
    def test_invalid(self, target: str) -> None:
        """Test malformed, missing and non-callable targets."""
        with pytest.raises(ValueError):
            resolve_target(target)


class TestLoadSuiteConfig:
    """Tests for load_suite_config function."""

    def test_load(self, tmp_path: Path) -> None:
        """Test a full suite with defaults and overrides."""
        suite = load_suite_config(write_suite(tmp_path, SUITE))

        assert suite.name == "sorting"
        assert suite.options == BenchmarkOptions(warmup_iterations=3, bench_iterations=20)
        assert [b.name for b in suite.benchmarks] == ["sort-small", "sort-reverse", "os.path:join"]

        small, reverse, join = suite.benchmarks
        assert small.options == BenchmarkOptions(warmup_iterations=3, bench_iterations=20)
        assert small.args == [[3, 1, 2]]
        assert small.kwargs == {}
        assert small.enabled is True

        assert reverse.options == BenchmarkOptions(warmup_iterations=3, bench_iterations=5)
        assert reverse.kwargs == {"reverse": True}

        assert join.enabled is False

    def test_defaults(self, tmp_path: Path) -> None:
        """Test name and iteration counts fall back to defaults."""
        suite = load_suite_config(
            write_suite(tmp_path, "benchmarks:\n  - target: 'builtins:len'\n")
        )

        assert suite.name == "suite"
        assert suite.options == BenchmarkOptions()
        assert suite.benchmarks[0].options == BenchmarkOptions()

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file is an empty suite."""
        suite = load_suite_config(write_suite(tmp_path, ""))
        assert suite.benchmarks == []

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file is reported."""
        with pytest.raises(ValueError, match="not found"):
            load_suite_config(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "text",
        [
            "- just\n- a list\n",
            "benchmarks:\n  - name: no-target\n",
            "bench_iterations: 0\n",
            "benchmarks:\n  - target: 'builtins:len'\n    warmup_iterations: -1\n",
            "benchmarks:\n  - target: 'builtins:len'\n    args: 5\n",
            "benchmarks: [\n",
            "benchmarks:\n  - target: 'builtins:len'\n    enabled: 'no'\n",
            "benchmarks:\n  - target: 'builtins:len'\n    enabled: 0\n",
        ],
    )
    def test_invalid(self, tmp_path: Path, text: str) -> None:
        """Test malformed suites raise ValueError."""
        with pytest.raises(ValueError):
            load_suite_config(write_suite(tmp_path, text))

    def test_directory_is_not_a_suite(self, tmp_path: Path) -> None:
        """Test a directory path is reported like a missing file."""
        with pytest.raises(ValueError, match="not found"):
            load_suite_config(tmp_path)

    def test_enabled_false(self, tmp_path: Path) -> None:
        """Test YAML booleans are accepted for enabled."""
        suite = load_suite_config(
            write_suite(tmp_path, "benchmarks:\n  - target: 'builtins:len'\n    enabled: false\n")
        )
        assert suite.benchmarks[0].enabled is False
