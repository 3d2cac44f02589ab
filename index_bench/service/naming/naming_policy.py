"""
Deterministic names and locations for benchmark databases.

All functions here are pure string composition; nothing touches the
filesystem, so locations can be computed once and reused by every stage.
"""
from index_bench.config.benchmark_config import BenchmarkConfig
from index_bench.consts.StorageFormat import StorageFormat

DEFAULT_DATABASE = "default"


def base_name_for(fmt: str, scale: int) -> str:
    """Unknown formats map to the 'default' database instead of failing."""
    if StorageFormat.is_known(fmt):
        return f"{fmt}_tpcds_{scale}"
    return DEFAULT_DATABASE


def resolve_database_name(fmt: str, scale: int, prefix: str = "", postfix: str = "") -> str:
    return prefix + base_name_for(fmt, scale) + postfix


def resolve_table_location(
    root: str,
    version: str,
    fmt: str,
    scale: int,
    prefix: str = "",
    postfix: str = "",
) -> str:
    """root/version/tpcds/<database>/, always with a trailing slash."""
    database = resolve_database_name(fmt, scale, prefix, postfix)
    return f"{root.rstrip('/')}/{version}/tpcds/{database}/"


def resolve_catalog_path(root: str, version: str) -> str:
    return f"{root.rstrip('/')}/{version}/catalog.duckdb"


class NamingPolicy:
    """Naming functions bound to the values of one BenchmarkConfig."""

    def __init__(self, config: BenchmarkConfig):
        self.config = config

    def database_for(self, fmt: str) -> str:
        return resolve_database_name(
            fmt, self.config.scale, self.config.database_prefix, self.config.database_postfix
        )

    def location_for(self, fmt: str) -> str:
        return resolve_table_location(
            self.config.root_dir,
            self.config.engine_version,
            fmt,
            self.config.scale,
            self.config.database_prefix,
            self.config.database_postfix,
        )

    def catalog_path(self) -> str:
        return resolve_catalog_path(self.config.root_dir, self.config.engine_version)
