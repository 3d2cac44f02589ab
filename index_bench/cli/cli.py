#!/usr/bin/env python3
"""
Shared helpers for the index benchmark command-line interface.
"""
import argparse
from pathlib import Path
from typing import Optional


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common configuration options.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with --config-dir and --env.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=Path("conf"),
        help="Directory holding config.yaml (default: ./conf)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration (e.g., 'dev', 'prod'). "
            "Loads config_<env>.yaml instead of config.yaml."
        ),
    )
    return parser
