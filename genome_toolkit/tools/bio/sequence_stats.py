import logging
import math

from ...constants.constants import *
from ...models.bio_models import SequenceStats
from ...models.parser_models import SequenceFormat, SequenceRecord

logger = logging.getLogger(__name__)


def round2(value: float) -> float:
    """Round to 2 decimal places, halves away from zero.

    The built-in round() uses banker's rounding, which would turn 12.345 into
    12.34 rather than 12.35 on the scaled value.
    """
    scaled = value * PERCENTAGE_MULTIPLIER
    rounded = math.floor(abs(scaled) + 0.5)
    return math.copysign(rounded, scaled) / PERCENTAGE_MULTIPLIER


def percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round2(count / total * PERCENTAGE_MULTIPLIER)


def count_bases(sequence: str) -> dict[str, int]:
    counts = dict.fromkeys(COUNTED_BASES, 0)
    for base in sequence:
        if base in ("A", "T", "C", "G"):
            counts[base] += 1
        else:
            # N and every other ambiguity code
            counts["N"] += 1
    return counts


def compute_stats(record: SequenceRecord) -> SequenceStats:
    length = len(record.sequence)
    counts = count_bases(record.sequence)

    stats = SequenceStats(
        length=length,
        gc_percent=percentage(counts["G"] + counts["C"], length),
        n_percent=percentage(counts["N"], length),
        base_counts=counts,
    )

    if record.format is SequenceFormat.FASTQ and record.qualities:
        stats.mean_quality = round2(sum(record.qualities) / len(record.qualities))
        stats.per_position_quality = record.qualities

    logger.debug(
        f"Stats for {record.file_name}: {length:,} bp, GC {stats.gc_percent}%, N {stats.n_percent}%"
    )
    return stats


def attach_stats(record: SequenceRecord) -> SequenceRecord:
    return record.with_stats(compute_stats(record))
