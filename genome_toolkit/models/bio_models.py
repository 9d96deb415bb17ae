from typing import Optional
from dataclasses import dataclass


@dataclass
class SequenceStats:
    length: int
    gc_percent: float
    n_percent: float
    base_counts: dict[str, int]
    mean_quality: Optional[float] = None
    # Raw flattened Phred scores, one per base; not averaged per column.
    per_position_quality: Optional[list[int]] = None


@dataclass(frozen=True)
class MotifMatch:
    position: int
    context: str


@dataclass(frozen=True)
class PreviewSegment:
    text: str
    highlighted: bool = False


@dataclass(frozen=True)
class GCWindow:
    window_start: int
    window_end: int
    gc_percent: float
