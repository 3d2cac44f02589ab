"""
Benchmark data builder: dataset generation, table transformation and index
cost measurement for every configured storage format.
"""
from typing import Optional, Sequence

from index_bench.config.benchmark_config import BenchmarkConfig
from index_bench.consts import tpcds
from index_bench.service.aggregator.result_aggregator import ResultAggregator
from index_bench.service.index_builder.index_builder import IndexBuilder
from index_bench.service.materializer.dataset_materializer import DatasetMaterializer
from index_bench.service.naming.naming_policy import NamingPolicy
from index_bench.service.store.dataset_generator import DatasetGenerator, DuckdbTpcdsGenerator
from index_bench.service.store.file_system import FileSystem, LocalFileSystem
from index_bench.service.store.index_store import IndexStore, LocalIndexStore
from index_bench.service.store.table_store import DuckdbTableStore, TableStore
from index_bench.service.transformer.table_transformer import TableTransformer
from index_bench.util.log_config import setup_logger

logger = setup_logger(__name__)


class BenchmarkDataBuilder:

    def __init__(
        self,
        config: BenchmarkConfig,
        table_store: TableStore,
        index_store: IndexStore,
        filesystem: FileSystem,
        generator: DatasetGenerator,
        aggregator: Optional[ResultAggregator] = None,
        transformer: Optional[TableTransformer] = None,
    ):
        self.config = config
        self.naming = NamingPolicy(config)
        self.table_store = table_store
        self.index_builder = IndexBuilder(index_store)
        self.aggregator = aggregator or ResultAggregator()
        self.materializer = DatasetMaterializer(
            config,
            self.naming,
            table_store,
            generator,
            transformer or TableTransformer(table_store, filesystem, partitions=config.partitions),
        )

    @classmethod
    def from_config(cls, config: BenchmarkConfig) -> "BenchmarkDataBuilder":
        """Wire the DuckDB-backed stores under the configured root directory."""
        table_store = DuckdbTableStore(NamingPolicy(config).catalog_path())
        return cls(
            config,
            table_store=table_store,
            index_store=LocalIndexStore(table_store),
            filesystem=LocalFileSystem(),
            generator=DuckdbTpcdsGenerator(config.tool_dir),
        )

    @property
    def engine_name(self) -> str:
        cls = type(self)
        return f"{cls.__module__}.{cls.__qualname__}"

    def _formats(self, formats: Optional[Sequence[str]]) -> Sequence[str]:
        return list(formats) if formats else self.config.formats

    def generate_tables(self, formats: Optional[Sequence[str]] = None) -> None:
        self.materializer.generate_tables(self._formats(formats))

    def generate_databases(self, formats: Optional[Sequence[str]] = None) -> None:
        self.materializer.generate_databases(self._formats(formats))

    def build_all_index(
        self,
        formats: Optional[Sequence[str]] = None,
        table: str = tpcds.BASE_TABLE,
        ordered_column: str = tpcds.ORDERED_INDEX_COLUMN,
        bitmap_column: str = tpcds.DERIVED_COLUMN,
    ) -> str:
        """
        Build an ORDERED and a BITMAP index per format and print the report.

        The output lists index construction time and index size per format,
        one line per test, preceded by a '#<engine name>' header line.
        """
        for fmt in self._formats(formats):
            test = f"{fmt} index cost"
            logger.info(f"Building indexes for {test}")
            self.table_store.use_database(self.naming.database_for(fmt))
            costs = self.index_builder.build_table_indexes(
                self.naming.location_for(fmt), table, ordered_column, bitmap_column
            )
            self.aggregator.record(test, costs)

        report = f"#{self.engine_name}\n{self.aggregator.render()}"
        print(report)
        return report
