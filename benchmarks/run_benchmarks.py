#!/usr/bin/env python3
"""
Main entry point for authtrees benchmarks.

Usage:
    # Run with default settings
    python -m benchmarks.run_benchmarks

    # Run with custom seed for reproducibility
    BENCHMARK_SEED=123 python -m benchmarks.run_benchmarks

    # Run in verify-only mode (no timing, only correctness)
    BENCHMARK_VERIFY_ONLY=true python -m benchmarks.run_benchmarks

    # Only the staged tree, smaller sizes
    python -m benchmarks.run_benchmarks --only staged --sizes 16 256
"""

import argparse
import logging
import os
import sys
import time
from datetime import datetime

from .config import BenchmarkConfig
from .runner import BenchmarkRunner


def setup_logging(config: BenchmarkConfig, log_dir: str = None) -> None:
    """Configure logging for benchmark output."""
    handlers = [logging.StreamHandler()]

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = os.path.join(log_dir, f"benchmark_{ts}.log")
        handlers.append(logging.FileHandler(log_path, mode="w"))

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )
    logging.getLogger("authtrees").setLevel(level)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run authtrees benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--seed", type=int, help="Random seed (default: from env or 42)")
    parser.add_argument("--sizes", type=int, nargs="+", help="Leaf counts for the staged tree")
    parser.add_argument("--depths", type=int, nargs="+", help="Staged tree depths")
    parser.add_argument("--branch-counts", type=int, nargs="+", help="Branch counts for the subtree")
    parser.add_argument("--smt-depth", type=int, help="Sparse tree depth (default: 254)")
    parser.add_argument("--repetitions", type=int, help="Repetitions per configuration")
    parser.add_argument(
        "--only",
        choices=["staged", "subtree"],
        help="Run only one family of benchmarks",
    )
    parser.add_argument("--verify-only", action="store_true", help="Run in verify-only mode (no timing)")
    parser.add_argument("--skip-warmup", action="store_true", help="Skip warmup phase")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-dir", help="Directory for log files (default: benchmarks/logs)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    config = BenchmarkConfig.from_env()

    if args.seed is not None:
        config.seed = args.seed
    if args.sizes is not None:
        config.sizes = args.sizes
    if args.depths is not None:
        config.depths = args.depths
    if args.branch_counts is not None:
        config.branch_counts = args.branch_counts
    if args.smt_depth is not None:
        config.smt_depth = args.smt_depth
    if args.repetitions is not None:
        config.repetitions = args.repetitions
    if args.verify_only:
        config.verify_only = True
    if args.skip_warmup:
        config.skip_warmup = True
    if args.log_level is not None:
        config.log_level = args.log_level

    log_dir = args.log_dir or os.path.join(os.path.dirname(__file__), "logs")
    setup_logging(config, log_dir if not config.verify_only else None)

    logging.info("=" * 70)
    logging.info("AUTHTREES BENCHMARKS")
    logging.info("=" * 70)

    runner = BenchmarkRunner(config)
    overall_start = time.perf_counter()
    ok = True

    if args.only in (None, "staged"):
        for depth in config.depths:
            for size in config.sizes:
                results, metadata = runner.run_staged(size, depth)
                if results:
                    ok = runner.aggregate_and_report(results, metadata) and ok

    if args.only in (None, "subtree"):
        for size in config.branch_counts:
            results, metadata = runner.run_subtree(size)
            ok = runner.aggregate_and_report(results, metadata) and ok

    logging.info("=" * 70)
    logging.info(f"TOTAL EXECUTION TIME: {time.perf_counter() - overall_start:.3f} seconds")
    logging.info("=" * 70)

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
