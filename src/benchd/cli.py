"""Command-line interface for benchd.

Provides the `benchd` command with subcommands for:
- Timing a single callable
- Running a YAML benchmark suite

Results go to stdout as JSON, one object per line; logs go to stderr.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from benchd.config import BenchmarkConfig, load_suite_config, resolve_target
from benchd.runner import BenchmarkOptions, benchmark
from benchd.serialize import Scale, format_stats, to_dict, to_json_string

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _scale(args: argparse.Namespace) -> Scale | None:
    return Scale(args.scale) if args.scale else None


def _override(options: BenchmarkOptions, args: argparse.Namespace) -> BenchmarkOptions:
    changes = {}
    if args.warmup is not None:
        changes["warmup_iterations"] = args.warmup
    if args.iterations is not None:
        changes["bench_iterations"] = args.iterations
    return dataclasses.replace(options, **changes)


def cmd_time(args: argparse.Namespace) -> int:
    """Benchmark a single callable."""
    try:
        func = resolve_target(args.target)
        options = _override(BenchmarkOptions(), args)
    except (TypeError, ValueError) as e:
        logger.error("%s", e)
        return 1

    logger.info("Timing %s", args.target)
    try:
        stats = benchmark(options, func, *args.args)
    except Exception:
        logger.exception("Benchmark %s failed", args.target)
        return 1

    if args.summary:
        print(f"{args.target}: {format_stats(stats, _scale(args))}")
    else:
        print(to_json_string(stats, _scale(args)))
    return 0


def _run_one(config: BenchmarkConfig, args: argparse.Namespace) -> str | None:
    func = resolve_target(config.target)
    options = _override(config.options, args)

    logger.info(
        "Running %s (%d warmup, %d measured)",
        config.name,
        options.warmup_iterations,
        options.bench_iterations,
    )
    try:
        stats = benchmark(options, func, *config.args, **config.kwargs)
    except Exception:
        logger.exception("Benchmark %s failed", config.name)
        return None

    if args.summary:
        return f"{config.name}: {format_stats(stats, _scale(args))}"
    return json.dumps(
        {"name": config.name, "stats": to_dict(stats, _scale(args))},
        separators=(",", ":"),
    )


def cmd_run(args: argparse.Namespace) -> int:
    """Run a benchmark suite."""
    try:
        suite = load_suite_config(Path(args.suite))
    except (OSError, ValueError) as e:
        logger.error("Error loading suite configuration: %s", e)
        return 1

    configs = [c for c in suite.benchmarks if c.enabled]
    if args.benchmark:
        configs = [c for c in configs if c.name == args.benchmark]
        if not configs:
            logger.error("No enabled benchmark named %r in %s", args.benchmark, suite.name)
            return 1

    logger.info("Suite %s: %d benchmark(s)", suite.name, len(configs))

    lines = []
    failed = 0
    for config in configs:
        try:
            line = _run_one(config, args)
        except (TypeError, ValueError) as e:
            logger.error("Benchmark %s: %s", config.name, e)
            line = None
        if line is None:
            failed += 1
        else:
            lines.append(line)

    if args.output:
        Path(args.output).write_text("".join(line + "\n" for line in lines))
        logger.info("Wrote %d result(s) to %s", len(lines), args.output)
    else:
        for line in lines:
            print(line)

    if failed:
        logger.warning("%d of %d benchmark(s) failed", failed, len(configs))
        return 1
    return 0


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--warmup",
        type=int,
        help="Number of warmup iterations (default: 10, or the suite's value)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        help="Number of timed iterations (default: 100, or the suite's value)",
    )
    parser.add_argument(
        "--scale",
        choices=[s.value for s in Scale],
        help="Display unit (default: chosen from the fastest run)",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a one-line human-readable summary instead of JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="benchd",
        description="Micro-benchmark Python callables",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug details to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # time command
    time_parser = subparsers.add_parser("time", help="Benchmark one callable")
    time_parser.add_argument(
        "target",
        help="Callable to benchmark, as module:attribute",
    )
    time_parser.add_argument(
        "args",
        nargs="*",
        help="String arguments passed to the callable",
    )
    _add_common_options(time_parser)
    time_parser.set_defaults(func=cmd_time)

    # run command
    run_parser = subparsers.add_parser("run", help="Run a benchmark suite")
    run_parser.add_argument(
        "suite",
        help="Path to suite YAML configuration",
    )
    run_parser.add_argument(
        "--benchmark",
        help="Run only the specified benchmark",
    )
    run_parser.add_argument(
        "-o",
        "--output",
        help="Write results to this file instead of stdout",
    )
    _add_common_options(run_parser)
    run_parser.set_defaults(func=cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    setup_logging(verbose=args.verbose, debug=args.debug)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
