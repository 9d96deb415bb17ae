import logging

from ...constants.constants import *
from ...models.bio_models import MotifMatch, PreviewSegment

logger = logging.getLogger(__name__)


def find_motif(sequence: str, motif: str) -> list[MotifMatch]:
    """Find every occurrence of a literal motif, overlapping matches included.

    Matching ignores case. Positions are 1-based and each context is cut from the
    original-case sequence, up to MOTIF_CONTEXT_RADIUS bases either side.
    """
    if not sequence or not motif:
        return []

    seq_upper = sequence.upper()
    motif_upper = motif.upper()
    motif_length = len(motif_upper)

    matches = []
    search_from = 0

    while search_from <= len(seq_upper) - motif_length:
        index = seq_upper.find(motif_upper, search_from)
        if index == -1:
            break

        context_start = max(0, index - MOTIF_CONTEXT_RADIUS)
        context_end = min(len(sequence), index + motif_length + MOTIF_CONTEXT_RADIUS)
        matches.append(MotifMatch(position=index + 1, context=sequence[context_start:context_end]))

        # Step by one so "AA" in "AAA" matches at 1 and 2
        search_from = index + 1

    logger.debug(f"Motif {motif_upper} matched {len(matches)} times")
    return matches


def build_preview_segments(
    sequence: str,
    matches: list[MotifMatch],
    motif_length: int,
    max_bases: int = MAX_PREVIEW_BASES,
) -> list[PreviewSegment]:
    display = sequence[:max_bases]
    if not display:
        return []
    if not matches or motif_length <= 0:
        return [PreviewSegment(text=display)]

    mask = [False] * len(display)
    for match in matches:
        start = match.position - 1
        for i in range(start, min(start + motif_length, len(display))):
            mask[i] = True

    segments = []
    current_highlighted = mask[0]
    current_start = 0
    for i in range(1, len(display)):
        if mask[i] != current_highlighted:
            segments.append(PreviewSegment(display[current_start:i], current_highlighted))
            current_highlighted = mask[i]
            current_start = i
    segments.append(PreviewSegment(display[current_start:], current_highlighted))

    return segments
