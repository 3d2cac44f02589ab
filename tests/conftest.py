from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from index_bench.config.benchmark_config import BenchmarkConfig
from index_bench.consts.IndexKind import IndexKind
from index_bench.errors import IndexNotFoundError
from index_bench.service.store.dataset_generator import DatasetGenerator
from index_bench.service.store.file_system import LocalFileSystem
from index_bench.service.store.index_store import IndexStore, LocalIndexStore
from index_bench.service.store.table_store import DuckdbTableStore
from index_bench.service.transformer.table_transformer import TableTransformer

NUM_ROWS = 10000


def synthetic_rows(store: DuckdbTableStore, num_rows: int = NUM_ROWS):
    """key runs 0..num_rows-1 in order; customer has 97 distinct values."""
    return store.con.sql(f"SELECT range AS key, range % 97 AS customer FROM range({num_rows})")


class SyntheticGenerator(DatasetGenerator):
    """Writes a small two-column table instead of running dsdgen."""

    def __init__(self, table_store: DuckdbTableStore, num_rows: int = NUM_ROWS):
        self.table_store = table_store
        self.num_rows = num_rows
        self.calls: List[Tuple[str, str, int, int, Tuple[str, ...]]] = []

    def generate(self, location, fmt, scale, partitions, tables, codec=None):
        self.calls.append((location, fmt, scale, partitions, tuple(tables)))
        for table in tables:
            self.table_store.write_table(
                synthetic_rows(self.table_store, self.num_rows), f"{location.rstrip('/')}/{table}", fmt,
                partitions=partitions,
            )


class FakeIndexStore(IndexStore):
    """In-memory index store recording the calls made to it."""

    def __init__(self, fail_on: Optional[IndexKind] = None):
        self.fail_on = fail_on
        self.indexes: Dict[Tuple[str, str], IndexKind] = {}
        self.calls: List[Tuple[str, ...]] = []

    def index_exists(self, table, index_name):
        return (table, index_name) in self.indexes

    def drop_index(self, table, index_name):
        self.calls.append(("drop", index_name))
        if (table, index_name) not in self.indexes:
            raise IndexNotFoundError(table, index_name)
        del self.indexes[(table, index_name)]

    def create_index_if_not_absent(self, table, column, kind, index_name):
        self.calls.append(("create", index_name, kind.name))
        if kind == self.fail_on:
            raise RuntimeError(f"cannot build {kind.name} index on {column}")
        if (table, index_name) in self.indexes:
            return False
        self.indexes[(table, index_name)] = kind
        return True

    def index_size_on_disk(self, table, location, column):
        return "1.0 KB"


@pytest.fixture
def table_store(tmp_path):
    store = DuckdbTableStore(str(tmp_path / "catalog.duckdb"))
    yield store
    store.close()


@pytest.fixture
def filesystem():
    return LocalFileSystem()


@pytest.fixture
def index_store(table_store):
    return LocalIndexStore(table_store)


@pytest.fixture
def synthetic_transformer(table_store, filesystem):
    return TableTransformer(
        table_store,
        filesystem,
        key_column="key",
        derived_column="key1",
    )


@pytest.fixture
def config(tmp_path):
    return BenchmarkConfig(root_dir=str(tmp_path / "data"), data_scale="10", data_partitions="1")


def make_base_table(store: DuckdbTableStore, location: str, fmt: str, table: str = "store_sales",
                    num_rows: int = NUM_ROWS, database: str = "bench") -> str:
    store.set_compression(fmt, "gzip")
    store.create_database(database)
    base = f"{location.rstrip('/')}/{table}"
    store.write_table(synthetic_rows(store, num_rows), base, fmt)
    return base


def column_values(store: DuckdbTableStore, table: str, columns: Sequence[str]) -> List[tuple]:
    quoted = [f'"{c}"' for c in columns]
    return store.scan_table(table).project(", ".join(quoted)).order(quoted[0]).fetchall()
