import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

import duckdb

from index_bench.consts.StorageFormat import StorageFormat
from index_bench.errors import UnsupportedFormatError
from index_bench.service.store.table_store import CSV_CODEC_EXTENSIONS, quote_ident, quote_literal
from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)


class DatasetGenerator(ABC):

    @abstractmethod
    def generate(
        self,
        location: str,
        fmt: str,
        scale: int,
        partitions: int,
        tables: Sequence[str],
        codec: Optional[str] = None,
    ) -> None:
        """Write each selected table to <location>/<table>/ in the given format."""
        pass


class DuckdbTpcdsGenerator(DatasetGenerator):
    """
    Generates TPC-DS tables with DuckDB's tpcds extension (dsdgen).

    The extension is installed into and loaded from tool_dir. Every table is
    split into `partitions` files by rowid so reruns produce the same layout.
    """

    def __init__(self, tool_dir: str, threads: Optional[int] = None):
        self.tool_dir = tool_dir
        self.threads = threads

    def _connect(self) -> duckdb.DuckDBPyConnection:
        Path(self.tool_dir).mkdir(parents=True, exist_ok=True)
        con = duckdb.connect()
        con.execute(f"SET extension_directory = {quote_literal(str(Path(self.tool_dir).resolve()))}")
        if self.threads:
            con.execute(f"SET threads = {int(self.threads)}")
        con.execute("INSTALL tpcds")
        con.execute("LOAD tpcds")
        return con

    def generate(
        self,
        location: str,
        fmt: str,
        scale: int,
        partitions: int,
        tables: Sequence[str],
        codec: Optional[str] = None,
    ) -> None:
        if not StorageFormat.is_known(fmt):
            raise UnsupportedFormatError(fmt)

        con = self._connect()
        try:
            logger.info(f"Running dsdgen(sf={scale}) for {fmt} at {location}")
            con.execute(f"CALL dsdgen(sf = {scale})")
            for table in tables:
                self._export_table(con, table, Path(location) / table, fmt, partitions, codec)
        finally:
            con.close()

    def _export_table(
        self,
        con: duckdb.DuckDBPyConnection,
        table: str,
        target: Path,
        fmt: str,
        partitions: int,
        codec: Optional[str],
    ) -> None:
        if target.exists():
            shutil.rmtree(target)
        target.mkdir(parents=True)

        for part in range(partitions):
            path = target / f"part-{part:05d}{_file_extension(fmt, codec)}"
            con.execute(
                f"COPY (SELECT * FROM {quote_ident(table)} WHERE rowid % {partitions} = {part}) "
                f"TO {quote_literal(str(path))} ({_copy_options(fmt, codec)})"
            )
        rows = con.execute(f"SELECT count(*) FROM {quote_ident(table)}").fetchone()[0]
        logger.info(f"[OK] Generated {table}: rows={rows} files={partitions} -> {target}")


def _file_extension(fmt: str, codec: Optional[str]) -> str:
    if fmt == StorageFormat.PARQUET.value:
        return ".parquet"
    return ".csv" + CSV_CODEC_EXTENSIONS.get(codec or "", "")


def _copy_options(fmt: str, codec: Optional[str]) -> str:
    if fmt == StorageFormat.PARQUET.value:
        return f"FORMAT PARQUET, COMPRESSION {quote_literal(codec or 'snappy')}"
    if codec in CSV_CODEC_EXTENSIONS:
        return f"FORMAT CSV, HEADER, COMPRESSION {quote_literal(codec)}"
    return "FORMAT CSV, HEADER"
