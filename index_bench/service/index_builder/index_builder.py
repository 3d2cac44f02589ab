import time
from typing import Tuple

from index_bench.consts import tpcds
from index_bench.consts.IndexKind import IndexKind
from index_bench.models.index_cost_record import DropOutcome, IndexCostRecord
from index_bench.service.store.index_store import IndexStore, index_name_for
from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)


class IndexBuilder:
    """
    Builds one index per call: drop any stale index of the same name, create
    the new one, then measure its build time and size.

    Rebuilding is idempotent. A missing index on the drop step is expected
    and only logged; errors while creating the index propagate.
    """

    def __init__(self, index_store: IndexStore):
        self.index_store = index_store

    def drop_if_exists(self, table: str, index_name: str) -> DropOutcome:
        if not self.index_store.index_exists(table, index_name):
            logger.warning(f"Index {index_name} doesn't exist, so don't need to drop here!")
            return DropOutcome.NOT_FOUND
        self.index_store.drop_index(table, index_name)
        return DropOutcome.DROPPED

    def build_index(self, kind: IndexKind, table: str, column: str, location: str) -> IndexCostRecord:
        index_name = index_name_for(table, column)
        self.drop_if_exists(table, index_name)

        logger.debug(kind.create_statement(index_name, table, column))
        start = time.perf_counter()
        self.index_store.create_index_if_not_absent(table, column, kind, index_name)
        elapsed_ms = (time.perf_counter() - start) * 1000

        size = self.index_store.index_size_on_disk(table, location, column)
        logger.info(f"{kind.label} index {index_name}: time={elapsed_ms:.3f}ms size={size}")
        return IndexCostRecord(kind_label=kind.label, construction_time_ms=elapsed_ms, size=size)

    def build_table_indexes(
        self,
        location: str,
        table: str = tpcds.BASE_TABLE,
        ordered_column: str = tpcds.ORDERED_INDEX_COLUMN,
        bitmap_column: str = tpcds.DERIVED_COLUMN,
    ) -> Tuple[IndexCostRecord, IndexCostRecord]:
        """ORDERED is always built first; report columns follow this order."""
        ordered = self.build_index(IndexKind.ORDERED, table, ordered_column, location)
        bitmap = self.build_index(IndexKind.BITMAP, table, bitmap_column, location)
        return ordered, bitmap
