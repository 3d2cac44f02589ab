"""Index cost data models."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class IndexCostRecord:
    """
    Cost of building one index.

    Construction time is wall-clock milliseconds of the create call only;
    size is the human-readable on-disk footprint of the index files.
    """
    kind_label: str
    construction_time_ms: float
    size: str

    def format_time(self) -> str:
        return f"{self.construction_time_ms:.3f}"


class DropOutcome(Enum):
    DROPPED = "dropped"
    NOT_FOUND = "not_found"
