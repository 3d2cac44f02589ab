from dataclasses import asdict, dataclass, fields
from typing import Dict, List


@dataclass(frozen=True)
class BenchmarkConfig:
    """
    Benchmark parameters, one string value per recognized option.

    Numeric and list options are kept as strings, the way they appear in the
    configuration file; use the typed properties to read them.
    """

    compression_codec: str = "gzip"
    engine_version: str = "1.1.0"
    tool_dir: str = "./tools/duckdb_extensions"
    root_dir: str = "./data/indextest"
    database_prefix: str = ""
    database_postfix: str = ""
    data_scale: str = "1"
    data_partitions: str = "8"
    storage_formats: str = "parquet,csv"

    @classmethod
    def recognized_keys(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @property
    def scale(self) -> int:
        return int(self.data_scale)

    @property
    def partitions(self) -> int:
        return int(self.data_partitions)

    @property
    def formats(self) -> List[str]:
        return [fmt.strip() for fmt in self.storage_formats.split(",") if fmt.strip()]

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
