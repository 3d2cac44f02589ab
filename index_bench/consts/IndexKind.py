from enum import Enum


class IndexKind(Enum):
    """Index variants under test; value is the ``USING`` keyword."""

    ORDERED = "BTREE"
    BITMAP = "BITMAP"

    @property
    def label(self) -> str:
        return {IndexKind.ORDERED: "Btree", IndexKind.BITMAP: "Bitmap"}[self]

    @property
    def file_suffix(self) -> str:
        return f".{self.value.lower()}.index"

    def create_statement(self, index_name: str, table: str, column: str) -> str:
        return f"CREATE INDEX IF NOT EXISTS {index_name} ON {table} ({column}) USING {self.value}"
