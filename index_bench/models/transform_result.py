from dataclasses import dataclass


@dataclass(frozen=True)
class TransformResult:
    base_location: str
    duplicate_location: str
    divisor: int
