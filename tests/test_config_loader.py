import yaml

from index_bench.config.benchmark_config import BenchmarkConfig
from index_bench.config.config_loader import ConfigLoader, load_config

FULL_CONFIG = {
    "compression_codec": "zstd",
    "engine_version": "9.9",
    "tool_dir": "/opt/tools",
    "root_dir": "/bench",
    "database_prefix": "p_",
    "database_postfix": "",
    "data_scale": 10,
    "data_partitions": "4",
    "storage_formats": "csv, parquet",
}


def write_yaml(path, data, name="config.yaml"):
    path.mkdir(parents=True, exist_ok=True)
    (path / name).write_text(yaml.safe_dump(data), encoding="utf-8")


def test_missing_file_uses_defaults(tmp_path):
    assert load_config(tmp_path) == BenchmarkConfig()


def test_full_file_is_loaded(tmp_path):
    write_yaml(tmp_path, FULL_CONFIG)
    config = load_config(tmp_path)
    assert config.compression_codec == "zstd"
    assert config.data_scale == "10"
    assert config.scale == 10
    assert config.partitions == 4
    assert config.formats == ["csv", "parquet"]
    assert config.database_postfix == ""


def test_env_file_replaces_base_file(tmp_path):
    write_yaml(tmp_path, FULL_CONFIG)
    write_yaml(tmp_path, dict(FULL_CONFIG, engine_version="dev"), name="config_dev.yaml")
    loader = ConfigLoader(tmp_path, env="dev")
    assert loader.config_file.name == "config_dev.yaml"
    assert loader.config_data.engine_version == "dev"


def test_missing_env_file_uses_defaults(tmp_path):
    write_yaml(tmp_path, FULL_CONFIG)
    assert load_config(tmp_path, env="prod") == BenchmarkConfig()


def test_incomplete_file_is_not_merged(tmp_path):
    write_yaml(tmp_path, {"compression_codec": "zstd"})
    config = load_config(tmp_path)
    assert config == BenchmarkConfig()
    assert config.compression_codec == "gzip"


def test_invalid_yaml_uses_defaults(tmp_path):
    (tmp_path / "config.yaml").write_text("compression_codec: [unclosed", encoding="utf-8")
    assert load_config(tmp_path) == BenchmarkConfig()


def test_non_mapping_document_uses_defaults(tmp_path):
    write_yaml(tmp_path, ["parquet", "csv"])
    assert load_config(tmp_path) == BenchmarkConfig()


def test_non_numeric_scale_uses_defaults(tmp_path):
    write_yaml(tmp_path, dict(FULL_CONFIG, data_scale="ten"))
    assert load_config(tmp_path) == BenchmarkConfig()


def test_empty_format_list_uses_defaults(tmp_path):
    write_yaml(tmp_path, dict(FULL_CONFIG, storage_formats=" , "))
    assert load_config(tmp_path) == BenchmarkConfig()


def test_unrecognized_keys_are_ignored(tmp_path):
    write_yaml(tmp_path, dict(FULL_CONFIG, extra_option="x"))
    assert load_config(tmp_path).root_dir == "/bench"


def test_defaults_resolve_every_key():
    config = BenchmarkConfig()
    assert all(value is not None for value in config.to_dict().values())
    assert config.formats == ["parquet", "csv"]
