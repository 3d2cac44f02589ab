from enum import Enum


class StorageFormat(Enum):
    PARQUET = "parquet"
    CSV = "csv"

    @classmethod
    def is_known(cls, value: str) -> bool:
        return value in cls._value2member_map_
