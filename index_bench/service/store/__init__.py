"""Storage collaborators: tables, files, indexes and generated datasets."""

from .dataset_generator import DatasetGenerator, DuckdbTpcdsGenerator
from .file_system import FileSystem, LocalFileSystem
from .index_store import IndexStore, LocalIndexStore, index_name_for
from .table_store import DuckdbTableStore, TableStore, WriteMode

__all__ = [
    "DatasetGenerator",
    "DuckdbTpcdsGenerator",
    "FileSystem",
    "LocalFileSystem",
    "IndexStore",
    "LocalIndexStore",
    "index_name_for",
    "DuckdbTableStore",
    "TableStore",
    "WriteMode",
]
