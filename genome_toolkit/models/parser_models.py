from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .bio_models import SequenceStats


class SequenceFormat(Enum):
    FASTA = "FASTA"
    FASTQ = "FASTQ"


@dataclass(frozen=True)
class SequenceRecord:
    id: str
    file_name: str
    format: SequenceFormat
    header: str
    sequence: str
    qualities: Optional[list[int]] = None
    stats: Optional[SequenceStats] = None

    @property
    def length(self) -> int:
        return len(self.sequence)

    def with_stats(self, stats: SequenceStats) -> "SequenceRecord":
        return replace(self, stats=stats)


@dataclass(frozen=True)
class Variant:
    chrom: str
    pos: int
    ref: str
    alt: str

    @property
    def key(self) -> tuple[str, int, str, str]:
        return (self.chrom, self.pos, self.ref, self.alt)

    def to_dict(self) -> dict[str, object]:
        return {"chrom": self.chrom, "pos": self.pos, "ref": self.ref, "alt": self.alt}
