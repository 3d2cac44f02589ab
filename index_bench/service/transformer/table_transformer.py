from pathlib import Path

from index_bench.consts import tpcds
from index_bench.models.transform_result import TransformResult
from index_bench.service.store.file_system import FileSystem
from index_bench.service.store.table_store import TableStore, WriteMode, quote_ident
from index_bench.util.file_utils import directory_size, human_size
from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)


def scaling_divisor(max_key: int, cardinality: int = tpcds.DERIVED_CARDINALITY) -> int:
    """
    Divisor that collapses keys in [0, max_key] into about `cardinality` buckets.

    Keys below `cardinality` would give a zero divisor; those are left as is.
    """
    return max(int(max_key) // cardinality, 1)


class TableTransformer:
    """
    Rewrites a base table with an extra low-cardinality column and makes an
    identical duplicate of it.

    To compare ORDERED and BITMAP indexes, the duplicate table exists next to
    the base table; it can also serve as an untouched copy for other tests.
    """

    def __init__(
        self,
        table_store: TableStore,
        filesystem: FileSystem,
        base_table: str = tpcds.BASE_TABLE,
        duplicate_table: str = tpcds.DUPLICATE_TABLE,
        staging_table: str = tpcds.STAGING_TABLE,
        key_column: str = tpcds.PARTITION_KEY_COLUMN,
        derived_column: str = tpcds.DERIVED_COLUMN,
        cardinality: int = tpcds.DERIVED_CARDINALITY,
        partitions: int = 1,
    ):
        self.table_store = table_store
        self.filesystem = filesystem
        self.base_table = base_table
        self.duplicate_table = duplicate_table
        self.staging_table = staging_table
        self.key_column = key_column
        self.derived_column = derived_column
        self.cardinality = cardinality
        self.partitions = partitions

    def transform(self, fmt: str, database: str, location: str) -> TransformResult:
        root = location.rstrip("/")
        base_location = f"{root}/{self.base_table}"
        staging_location = f"{root}/{self.staging_table}"
        duplicate_location = f"{root}/{self.duplicate_table}"

        self.table_store.use_database(database)
        self.table_store.drop_table_if_exists(self.base_table)
        self.table_store.drop_table_if_exists(self.duplicate_table)

        table = self.table_store.read_table(base_location, fmt)
        max_key = self.table_store.max_value(table, self.key_column)
        if max_key is None:
            raise ValueError(f"Cannot derive {self.derived_column}: {base_location} has no {self.key_column} values")
        divisor = scaling_divisor(max_key, self.cardinality)
        logger.info(f"Deriving {self.derived_column} = {self.key_column} // {divisor} for {database}")

        derived = self.table_store.with_column(
            table, self.derived_column, f"{quote_ident(self.key_column)} // {divisor}"
        )
        self.table_store.write_table(
            derived, staging_location, fmt, mode=WriteMode.OVERWRITE, partitions=self.partitions
        )

        # the base location is missing until the first copy lands
        self.filesystem.delete(base_location, recursive=True)
        self.filesystem.copy(staging_location, base_location, delete_source=False)
        self.filesystem.delete(duplicate_location, recursive=True)
        self.filesystem.copy(staging_location, duplicate_location, delete_source=True)

        self.table_store.create_external_table(self.base_table, base_location, fmt)
        self.table_store.create_external_table(self.duplicate_table, duplicate_location, fmt)

        self._log_table_stats(fmt, base_location)
        return TransformResult(
            base_location=base_location,
            duplicate_location=duplicate_location,
            divisor=divisor,
        )

    def _log_table_stats(self, fmt: str, base_location: str) -> None:
        try:
            size = directory_size(Path(base_location))
            rows = self.table_store.row_count(self.table_store.scan_table(self.base_table))
        except Exception as e:
            logger.warning(f"Could not measure table {self.base_table} in {fmt} format: {e}")
            return
        logger.info(f"File size of original table {self.base_table} in {fmt} format: {human_size(size)} ({size} bytes)")
        logger.info(f"Records of table {self.base_table}: {rows}")
