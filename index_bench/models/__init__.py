"""Models for index benchmark data structures."""

from .index_cost_record import DropOutcome, IndexCostRecord
from .transform_result import TransformResult

__all__ = ["DropOutcome", "IndexCostRecord", "TransformResult"]
