from typing import Sequence

from index_bench.config.benchmark_config import BenchmarkConfig
from index_bench.consts import tpcds
from index_bench.service.naming.naming_policy import NamingPolicy
from index_bench.service.store.dataset_generator import DatasetGenerator
from index_bench.service.store.table_store import TableStore
from index_bench.service.transformer.table_transformer import TableTransformer
from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)


class DatasetMaterializer:
    """
    Provisions raw datasets and per-format databases.

    generate_tables() is not idempotent: rerunning it regenerates and
    overwrites the raw table files of every format.
    """

    def __init__(
        self,
        config: BenchmarkConfig,
        naming: NamingPolicy,
        table_store: TableStore,
        generator: DatasetGenerator,
        transformer: TableTransformer,
        tables: Sequence[str] = tpcds.DEFAULT_TABLES,
    ):
        self.config = config
        self.naming = naming
        self.table_store = table_store
        self.generator = generator
        self.transformer = transformer
        self.tables = tuple(tables)

    def generate_tables(self, formats: Sequence[str]) -> None:
        codec = self.config.compression_codec
        for fmt in formats:
            self.table_store.set_compression(fmt, codec)
            location = self.naming.location_for(fmt)
            logger.info(f"Generating {', '.join(self.tables)} ({fmt}, codec={codec}) at {location}")
            self.generator.generate(
                location,
                fmt,
                self.config.scale,
                self.config.partitions,
                self.tables,
                codec=codec,
            )

    def generate_databases(self, formats: Sequence[str]) -> None:
        for fmt in formats:
            self.table_store.create_database(self.naming.database_for(fmt))

        for fmt in formats:
            self.table_store.set_compression(fmt, self.config.compression_codec)
            result = self.transformer.transform(fmt, self.naming.database_for(fmt), self.naming.location_for(fmt))
            logger.info(f"[OK] {fmt}: {result.base_location} and {result.duplicate_location} ready (divisor={result.divisor})")
