"""
Index store writing ORDERED and BITMAP index files next to table data.

Index files live in ``<table location>/_index/`` and are named
``<table>_<column>_index.<kind>.index``. Both kinds are parquet files:

- ORDERED: (key, row_id) pairs sorted by key, one row group per leaf run.
- BITMAP: one (key, bitmap) row per distinct key, the bitmap holding one
  bit per table row (big-endian bit order, as ``numpy.packbits``).
"""
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np
import pyarrow as pa
import pyarrow.parquet as pq

from index_bench.consts.IndexKind import IndexKind
from index_bench.errors import IndexNotFoundError
from index_bench.service.store.table_store import TableStore
from index_bench.util.file_utils import human_size
from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)

INDEX_DIR = "_index"
DEFAULT_ROW_GROUP_SIZE = 128 * 1024
BITMAP_BATCH_BYTES = 64 * 1024 * 1024


def index_name_for(table: str, column: str) -> str:
    return f"{table}_{column}_index"


def bitmap_batch_size(num_rows: int) -> int:
    """Number of per-key bitmaps held in memory at once, at least one."""
    return max(BITMAP_BATCH_BYTES // max((num_rows + 7) // 8, 1), 1)


class IndexStore(ABC):

    @abstractmethod
    def index_exists(self, table: str, index_name: str) -> bool:
        pass

    @abstractmethod
    def drop_index(self, table: str, index_name: str) -> None:
        """Remove the index; raises IndexNotFoundError if it does not exist."""
        pass

    @abstractmethod
    def create_index_if_not_absent(self, table: str, column: str, kind: IndexKind, index_name: str) -> bool:
        """Build the index unless one with this name exists; True if built."""
        pass

    @abstractmethod
    def index_size_on_disk(self, table: str, location: str, column: str) -> str:
        pass


class LocalIndexStore(IndexStore):

    def __init__(self, table_store: TableStore, row_group_size: int = DEFAULT_ROW_GROUP_SIZE):
        self.table_store = table_store
        self.row_group_size = row_group_size
        self._writers: Dict[IndexKind, Callable[[np.ma.MaskedArray, Path], None]] = {
            IndexKind.ORDERED: self._write_ordered,
            IndexKind.BITMAP: self._write_bitmap,
        }

    def index_exists(self, table: str, index_name: str) -> bool:
        return bool(self._index_files(table, index_name))

    def drop_index(self, table: str, index_name: str) -> None:
        files = self._index_files(table, index_name)
        if not files:
            raise IndexNotFoundError(table, index_name)
        for path in files:
            path.unlink()
        logger.debug(f"Dropped index {index_name} on {table}")

    def create_index_if_not_absent(self, table: str, column: str, kind: IndexKind, index_name: str) -> bool:
        if self.index_exists(table, index_name):
            logger.info(f"Index {index_name} already exists on {table}, skipping")
            return False

        values = self.table_store.fetch_column(self.table_store.scan_table(table), column)
        index_dir = self._index_dir(table)
        index_dir.mkdir(parents=True, exist_ok=True)

        path = index_dir / f"{index_name}{kind.file_suffix}"
        tmp_path = path.with_name(path.name + ".tmp")
        self._writers[kind](values, tmp_path)
        os.replace(tmp_path, path)
        logger.debug(f"Built {kind.name} index {index_name} on {table}({column}) at {path}")
        return True

    def index_size_on_disk(self, table: str, location: str, column: str) -> str:
        index_dir = Path(location) / table / INDEX_DIR
        files = sorted(index_dir.glob(f"{index_name_for(table, column)}.*.index"))
        if not files:
            raise IndexNotFoundError(table, index_name_for(table, column))
        return human_size(sum(path.stat().st_size for path in files))

    def _index_dir(self, table: str) -> Path:
        return Path(self.table_store.table_location(table)) / INDEX_DIR

    def _index_files(self, table: str, index_name: str) -> List[Path]:
        return sorted(self._index_dir(table).glob(f"{index_name}.*.index"))

    def _write_ordered(self, values: np.ma.MaskedArray, path: Path) -> None:
        valid = ~np.ma.getmaskarray(values)
        row_ids = np.flatnonzero(valid)
        keys = np.ma.getdata(values)[valid]
        order = np.argsort(keys, kind="stable")

        sorted_run = pa.table({"key": pa.array(keys[order]), "row_id": pa.array(row_ids[order])})
        pq.write_table(sorted_run, path, row_group_size=self.row_group_size, compression="zstd")

    def _write_bitmap(self, values: np.ma.MaskedArray, path: Path) -> None:
        num_rows = len(values)
        valid = ~np.ma.getmaskarray(values)
        row_ids = np.flatnonzero(valid)
        keys = np.ma.getdata(values)[valid]

        distinct, inverse = np.unique(keys, return_inverse=True)
        order = np.argsort(inverse, kind="stable")
        bounds = np.cumsum(np.bincount(inverse, minlength=len(distinct)))[:-1]
        groups = np.split(row_ids[order], bounds) if len(distinct) else []

        batch_size = bitmap_batch_size(num_rows)
        writer = None
        try:
            for start in range(0, len(distinct), batch_size):
                end = start + batch_size
                batch = pa.table({
                    "key": pa.array(distinct[start:end]),
                    "bitmap": pa.array([_bitmap(ids, num_rows) for ids in groups[start:end]], type=pa.binary()),
                })
                if writer is None:
                    writer = pq.ParquetWriter(path, batch.schema, compression="zstd")
                writer.write_table(batch)
        finally:
            if writer is not None:
                writer.close()

        if writer is None:
            empty = pa.table({"key": pa.array([], type=pa.int64()), "bitmap": pa.array([], type=pa.binary())})
            pq.write_table(empty, path)


def _bitmap(row_ids: np.ndarray, num_rows: int) -> bytes:
    bits = np.zeros((num_rows + 7) // 8, dtype=np.uint8)
    np.bitwise_or.at(bits, row_ids >> 3, (128 >> (row_ids & 7)).astype(np.uint8))
    return bits.tobytes()
