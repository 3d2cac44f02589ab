class IndexNotFoundError(LookupError):
    """Raised when dropping or measuring an index that does not exist."""

    def __init__(self, table: str, index_name: str):
        super().__init__(f"Index {index_name} does not exist on table {table}")
        self.table = table
        self.index_name = index_name


class UnsupportedFormatError(ValueError):
    """Raised by a store asked to read or write an unknown storage format."""

    def __init__(self, fmt: str):
        super().__init__(f"Unsupported storage format: {fmt}")
        self.fmt = fmt


class TableNotRegisteredError(LookupError):
    """Raised when a table has no registered location in the catalog."""

    def __init__(self, table: str):
        super().__init__(f"Table {table} is not registered")
        self.table = table
