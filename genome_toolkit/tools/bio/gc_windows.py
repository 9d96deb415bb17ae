import logging

from ...constants.constants import *
from ...exceptions import ValidationError
from ...models.bio_models import GCWindow
from .sequence_stats import round2

logger = logging.getLogger(__name__)


def _is_gc(base: str) -> bool:
    return base in GC_BASES


def _window(start: int, window_size: int, gc_count: int) -> GCWindow:
    return GCWindow(
        window_start=start,
        window_end=start + window_size,
        gc_percent=round2(gc_count / window_size * PERCENTAGE_MULTIPLIER),
    )


def compute_gc_windows(sequence: str, window_size: int) -> list[GCWindow]:
    """GC percentage for every window of `window_size` bases, sliding by one.

    The GC count is carried from window to window: the base leaving on the left
    is subtracted and the base entering on the right is added, so the whole
    series costs O(n) rather than O(n * window_size).
    """
    if window_size <= 0:
        raise ValidationError("Window size must be greater than 0.")
    if window_size > len(sequence):
        raise ValidationError(
            f"Window size ({window_size}) cannot exceed sequence length ({len(sequence)})."
        )

    seq = sequence.upper()

    gc_count = sum(1 for base in seq[:window_size] if _is_gc(base))
    windows = [_window(0, window_size, gc_count)]

    for start in range(1, len(seq) - window_size + 1):
        if _is_gc(seq[start - 1]):
            gc_count -= 1
        if _is_gc(seq[start + window_size - 1]):
            gc_count += 1
        windows.append(_window(start, window_size, gc_count))

    logger.debug(f"Computed {len(windows):,} GC windows of {window_size} bp")
    return windows


def default_window_size(sequence_length: int) -> int:
    # About length / 100 bases per window, rounded half up
    size = int(sequence_length / GC_WINDOW_TARGET_COUNT + 0.5)
    size = min(GC_WINDOW_MAX_DEFAULT, max(GC_WINDOW_MIN_DEFAULT, size))
    return max(1, min(size, sequence_length))


def chart_label_step(window_count: int, max_labels: int = GC_CHART_MAX_LABELS) -> int:
    return max(1, window_count // max_labels)
