#!/usr/bin/env python3
"""
index-bench: generate TPC-DS data, derive the index test tables and measure
ORDERED / BITMAP index construction cost per storage format.

Usage:
  index-bench generate-tables [--formats parquet csv]
  index-bench generate-databases
  index-bench build-index
  index-bench all --env dev --log-file logs/index_bench.log
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from index_bench.cli.cli import build_env_parser
from index_bench.config.config_loader import load_config
from index_bench.service.benchmark_data_builder import BenchmarkDataBuilder
from index_bench.util.log_config import configure_logging, setup_logger

logger = setup_logger(__name__)

COMMANDS = ["generate-tables", "generate-databases", "build-index", "all"]


def build_benchmark_parser() -> argparse.ArgumentParser:
    ap = build_env_parser(description="Index construction cost benchmark (ORDERED vs BITMAP)")
    ap.add_argument("command", choices=COMMANDS,
                    help="Stage to run; 'all' runs every stage in order")
    ap.add_argument("--formats", nargs="+", default=None,
                    help="Storage formats to process (default: storage_formats from config)")
    ap.add_argument("--log-file", type=Path, default=None,
                    help="If set, also write detailed logs to this file")
    ap.add_argument("--verbose", action="store_true",
                    help="Enable debug logging")
    return ap


def run(args: argparse.Namespace) -> None:
    config = load_config(args.config_dir, args.env)
    builder = BenchmarkDataBuilder.from_config(config)
    with builder.table_store:
        if args.command in ("generate-tables", "all"):
            builder.generate_tables(args.formats)
        if args.command in ("generate-databases", "all"):
            builder.generate_databases(args.formats)
        if args.command in ("build-index", "all"):
            builder.build_all_index(args.formats)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_benchmark_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    try:
        run(args)
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
