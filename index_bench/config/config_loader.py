"""
Configuration loader for the index benchmark.

This module provides the ConfigLoader class for loading and validating the
benchmark configuration from a YAML file. A file that is missing or
structurally invalid is replaced as a whole by the built-in defaults.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from index_bench.config.benchmark_config import BenchmarkConfig
from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)


class ConfigError(ValueError):
    """Raised internally when a configuration file cannot be used."""


class ConfigLoader:

    def __init__(self, config_path: Path, env: Optional[str] = None):
        self.config_path = Path(config_path)
        self.env = env
        self.config_data = self._load_config()

    @property
    def config_file(self) -> Path:
        """config.yaml, or config_<env>.yaml when an environment is selected."""
        if self.env:
            return self.config_path / f"config_{self.env}.yaml"
        return self.config_path / "config.yaml"

    def _load_config(self) -> BenchmarkConfig:
        """
        Load the benchmark configuration, falling back to defaults.

        Returns:
            BenchmarkConfig: the file's values, or the full default set if the
            file could not be read or validated
        """
        try:
            return self._parse(self._read_file())
        except (OSError, yaml.YAMLError, ConfigError) as e:
            logger.warning(f"{e}. Use default setting!")
            return BenchmarkConfig()

    def _read_file(self) -> Any:
        with open(self.config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    @staticmethod
    def _parse(data: Any) -> BenchmarkConfig:
        if not isinstance(data, dict):
            raise ConfigError("Configuration document is not a mapping")

        recognized = BenchmarkConfig.recognized_keys()
        missing = [key for key in recognized if key not in data]
        if missing:
            raise ConfigError(f"Configuration is missing keys: {', '.join(missing)}")

        for key in data:
            if key not in recognized:
                logger.debug(f"Ignoring unrecognized configuration key: {key}")

        values: Dict[str, str] = {
            key: "" if data[key] is None else str(data[key]) for key in recognized
        }
        config = BenchmarkConfig(**values)

        for key in ("data_scale", "data_partitions"):
            value = getattr(config, key)
            if not value.isdigit() or int(value) <= 0:
                raise ConfigError(f"{key} must be a positive integer, got '{value}'")

        if not config.formats:
            raise ConfigError("storage_formats is empty")
        return config


def load_config(config_path: Path, env: Optional[str] = None) -> BenchmarkConfig:
    return ConfigLoader(config_path, env).config_data


if __name__ == "__main__":

    # python3 -m index_bench.config.config_loader

    from index_bench.util.file_utils import project_root

    root = project_root()
    print(load_config(root / "conf"))
