"""
Tests for motif search and preview highlighting.
"""

from genome_toolkit.models.bio_models import MotifMatch, PreviewSegment
from genome_toolkit.tools.bio.motif_search import build_preview_segments, find_motif


class TestFindMotif:
    """Tests for literal, overlapping motif search."""

    def test_overlapping_matches(self):
        matches = find_motif("AAA", "AA")
        assert [m.position for m in matches] == [1, 2]

    def test_positions_are_one_based(self):
        matches = find_motif("TTGATTACA", "GATTACA")
        assert [m.position for m in matches] == [3]

    def test_search_ignores_case(self):
        matches = find_motif("acgtACGT", "cG")
        assert [m.position for m in matches] == [2, 6]

    def test_context_keeps_original_case(self):
        matches = find_motif("ttttGAtttt", "ga")
        assert matches[0].context == "ttttGAtttt"

    def test_context_radius_is_ten_bases(self):
        sequence = "A" * 15 + "GATTACA" + "C" * 15
        matches = find_motif(sequence, "GATTACA")
        assert len(matches) == 1
        assert matches[0].position == 16
        assert matches[0].context == "A" * 10 + "GATTACA" + "C" * 10

    def test_context_is_clipped_at_boundaries(self):
        matches = find_motif("GATTACAAA", "GATTACA")
        assert matches[0].context == "GATTACAAA"

    def test_empty_inputs_return_nothing(self):
        assert find_motif("", "A") == []
        assert find_motif("ACGT", "") == []

    def test_motif_longer_than_sequence(self):
        assert find_motif("ACG", "ACGT") == []

    def test_no_match(self):
        assert find_motif("AAAAAA", "G") == []

    def test_match_at_end(self):
        matches = find_motif("CCCCAG", "AG")
        assert [m.position for m in matches] == [5]


class TestBuildPreviewSegments:
    """Tests for splitting a preview into highlighted runs."""

    def test_no_matches_gives_single_plain_segment(self):
        assert build_preview_segments("ACGT", [], 2) == [PreviewSegment("ACGT", False)]

    def test_highlight_in_middle(self):
        matches = find_motif("AAGGAA", "GG")
        segments = build_preview_segments("AAGGAA", matches, 2)
        assert segments == [
            PreviewSegment("AA", False),
            PreviewSegment("GG", True),
            PreviewSegment("AA", False),
        ]

    def test_overlapping_matches_merge(self):
        matches = find_motif("CAAAC", "AA")
        segments = build_preview_segments("CAAAC", matches, 2)
        assert segments == [
            PreviewSegment("C", False),
            PreviewSegment("AAA", True),
            PreviewSegment("C", False),
        ]

    def test_preview_is_truncated(self):
        matches = [MotifMatch(position=1, context=""), MotifMatch(position=9, context="")]
        segments = build_preview_segments("GGAAAAAAGG", matches, 2, max_bases=5)
        assert segments == [PreviewSegment("GG", True), PreviewSegment("AAA", False)]
        assert sum(len(s.text) for s in segments) == 5

    def test_empty_sequence(self):
        assert build_preview_segments("", [], 1) == []
