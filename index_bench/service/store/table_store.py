import shutil
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import duckdb
import numpy as np

from index_bench.consts.StorageFormat import StorageFormat
from index_bench.errors import TableNotRegisteredError, UnsupportedFormatError
from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)

REGISTRY_TABLE = "__index_bench_tables"
WRITE_SOURCE_VIEW = "__index_bench_write_source"
WRITE_BUFFER_TABLE = "__index_bench_write_buffer"
CSV_CODEC_EXTENSIONS = {"gzip": ".gz", "zstd": ".zst"}


class WriteMode(Enum):
    OVERWRITE = "overwrite"


def quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class TableStore(ABC):
    """
    Namespaces ("databases") holding tables that point at data locations.

    A table handle returned by read_table/scan_table is engine specific and
    only needs to be accepted back by the same store.
    """

    @abstractmethod
    def create_database(self, name: str) -> None:
        """Create the namespace if it does not exist yet."""
        pass

    @abstractmethod
    def use_database(self, name: str) -> None:
        pass

    @abstractmethod
    def drop_table_if_exists(self, name: str) -> None:
        pass

    @abstractmethod
    def read_table(self, location: str, fmt: str) -> Any:
        pass

    @abstractmethod
    def scan_table(self, name: str) -> Any:
        """Handle over a registered table of the current database."""
        pass

    @abstractmethod
    def write_table(
        self,
        table: Any,
        location: str,
        fmt: str,
        mode: WriteMode = WriteMode.OVERWRITE,
        partitions: int = 1,
    ) -> None:
        """Write the table as `partitions` part files under location."""
        pass

    @abstractmethod
    def create_external_table(self, name: str, location: str, fmt: str) -> None:
        pass

    @abstractmethod
    def table_location(self, name: str) -> str:
        pass

    @abstractmethod
    def row_count(self, table: Any) -> int:
        pass

    @abstractmethod
    def max_value(self, table: Any, column: str) -> Optional[Any]:
        pass

    @abstractmethod
    def with_column(self, table: Any, name: str, expression: str) -> Any:
        """Append a column computed row by row; an existing column is replaced."""
        pass

    @abstractmethod
    def fetch_column(self, table: Any, column: str) -> np.ma.MaskedArray:
        """All values of one column in row order; NULLs are masked."""
        pass

    @abstractmethod
    def set_compression(self, fmt: str, codec: str) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> "TableStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class DuckdbTableStore(TableStore):
    """
    Table store backed by a DuckDB catalog file.

    Databases are DuckDB schemas, tables are views over parquet or csv files
    in a location directory. The catalog keeps a registry of view locations so
    a later process can find the files behind a table.
    """

    def __init__(self, catalog_path: Optional[str] = None):
        self.catalog_path = catalog_path or ":memory:"
        if catalog_path:
            Path(catalog_path).parent.mkdir(parents=True, exist_ok=True)
        self.con = duckdb.connect(self.catalog_path)
        self.catalog = self.con.execute("SELECT current_database()").fetchone()[0]
        self.registry = f"{quote_ident(self.catalog)}.main.{REGISTRY_TABLE}"
        self.database = "main"
        self._codecs: Dict[str, str] = {}
        self.con.execute(
            f"CREATE TABLE IF NOT EXISTS {self.registry} ("
            "db_name VARCHAR, table_name VARCHAR, location VARCHAR, format VARCHAR, "
            "PRIMARY KEY (db_name, table_name))"
        )
        logger.debug(f"Opened DuckDB catalog: {self.catalog_path}")

    def close(self) -> None:
        self.con.close()

    def create_database(self, name: str) -> None:
        self.con.execute(f"CREATE SCHEMA IF NOT EXISTS {quote_ident(name)}")

    def use_database(self, name: str) -> None:
        self.con.execute(f"USE {quote_ident(self.catalog)}.{quote_ident(name)}")
        self.database = name

    def drop_table_if_exists(self, name: str) -> None:
        self.con.execute(f"DROP VIEW IF EXISTS {self._qualified(name)}")
        self.con.execute(
            f"DELETE FROM {self.registry} WHERE db_name = ? AND table_name = ?",
            [self.database, name],
        )

    def read_table(self, location: str, fmt: str) -> duckdb.DuckDBPyRelation:
        return self.con.sql(f"SELECT * FROM {self._scan_expression(location, fmt)}")

    def scan_table(self, name: str) -> duckdb.DuckDBPyRelation:
        return self.con.sql(f"SELECT * FROM {self._qualified(name)}")

    def write_table(
        self,
        table: duckdb.DuckDBPyRelation,
        location: str,
        fmt: str,
        mode: WriteMode = WriteMode.OVERWRITE,
        partitions: int = 1,
    ) -> None:
        if not StorageFormat.is_known(fmt):
            raise UnsupportedFormatError(fmt)
        target = Path(location)
        if mode == WriteMode.OVERWRITE and target.exists():
            shutil.rmtree(target)
        target.mkdir(parents=True, exist_ok=True)

        if partitions <= 1:
            self._write_part(table, target, 0, fmt)
            return

        # rows are buffered once so every part sees the same rowids
        table.create_view(WRITE_SOURCE_VIEW)
        try:
            self.con.execute(f"CREATE OR REPLACE TEMP TABLE {WRITE_BUFFER_TABLE} AS SELECT * FROM {WRITE_SOURCE_VIEW}")
            for part in range(partitions):
                rows = self.con.sql(f"SELECT * FROM {WRITE_BUFFER_TABLE} WHERE rowid % {partitions} = {part}")
                self._write_part(rows, target, part, fmt)
        finally:
            self.con.execute(f"DROP TABLE IF EXISTS temp.{WRITE_BUFFER_TABLE}")
            self.con.execute(f"DROP VIEW IF EXISTS {WRITE_SOURCE_VIEW}")

    def _write_part(self, table: duckdb.DuckDBPyRelation, target: Path, part: int, fmt: str) -> None:
        codec = self._codecs.get(fmt)
        if fmt == StorageFormat.PARQUET.value:
            path = target / f"part-{part:05d}.parquet"
            table.write_parquet(str(path), compression=codec or "snappy")
        else:
            extension = CSV_CODEC_EXTENSIONS.get(codec or "", "")
            path = target / f"part-{part:05d}.csv{extension}"
            table.write_csv(str(path), header=True, compression=codec if extension else None)
        logger.debug(f"Wrote {fmt} table to {path}")

    def create_external_table(self, name: str, location: str, fmt: str) -> None:
        self.con.execute(
            f"CREATE OR REPLACE VIEW {self._qualified(name)} AS "
            f"SELECT * FROM {self._scan_expression(location, fmt)}"
        )
        self.con.execute(
            f"INSERT OR REPLACE INTO {self.registry} VALUES (?, ?, ?, ?)",
            [self.database, name, location, fmt],
        )

    def table_location(self, name: str) -> str:
        row = self.con.execute(
            f"SELECT location FROM {self.registry} WHERE db_name = ? AND table_name = ?",
            [self.database, name],
        ).fetchone()
        if row is None:
            raise TableNotRegisteredError(name)
        return row[0]

    def row_count(self, table: duckdb.DuckDBPyRelation) -> int:
        return int(table.aggregate("count(*)").fetchone()[0])

    def max_value(self, table: duckdb.DuckDBPyRelation, column: str) -> Optional[Any]:
        return table.aggregate(f"max({quote_ident(column)})").fetchone()[0]

    def with_column(self, table: duckdb.DuckDBPyRelation, name: str, expression: str) -> duckdb.DuckDBPyRelation:
        if name in table.columns:
            return table.project(f"* REPLACE ({expression} AS {quote_ident(name)})")
        return table.project(f"*, {expression} AS {quote_ident(name)}")

    def fetch_column(self, table: duckdb.DuckDBPyRelation, column: str) -> np.ma.MaskedArray:
        return np.ma.asarray(table.project(quote_ident(column)).fetchnumpy()[column])

    def set_compression(self, fmt: str, codec: str) -> None:
        self._codecs[fmt] = codec

    def _qualified(self, name: str) -> str:
        return f"{quote_ident(self.database)}.{quote_ident(name)}"

    @staticmethod
    def _scan_expression(location: str, fmt: str) -> str:
        base = location.rstrip("/")
        if fmt == StorageFormat.PARQUET.value:
            return f"read_parquet({quote_literal(base + '/*.parquet')})"
        if fmt == StorageFormat.CSV.value:
            return f"read_csv({quote_literal(base + '/*.csv*')}, header = true)"
        raise UnsupportedFormatError(fmt)
