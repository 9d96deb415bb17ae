from dataclasses import dataclass
from enum import Enum

from .parser_models import Variant


class ComparisonBucket(Enum):
    SHARED = "shared"
    UNIQUE_TO_A = "unique_to_a"
    UNIQUE_TO_B = "unique_to_b"


@dataclass(frozen=True)
class ComparisonSummary:
    shared_count: int
    unique_to_a_count: int
    unique_to_b_count: int
    total_a: int
    total_b: int


@dataclass(frozen=True)
class VariantComparison:
    shared: list[Variant]
    unique_to_a: list[Variant]
    unique_to_b: list[Variant]
    summary: ComparisonSummary

    def bucket(self, bucket: ComparisonBucket) -> list[Variant]:
        return {
            ComparisonBucket.SHARED: self.shared,
            ComparisonBucket.UNIQUE_TO_A: self.unique_to_a,
            ComparisonBucket.UNIQUE_TO_B: self.unique_to_b,
        }[bucket]
