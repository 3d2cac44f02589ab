"""Configuration module for index benchmark runs."""

from .benchmark_config import BenchmarkConfig
from .config_loader import ConfigLoader, load_config

__all__ = ["BenchmarkConfig", "ConfigLoader", "load_config"]
