"""
Tests for AppLogic and the caller-owned ToolkitState.
"""

import pytest

from genome_toolkit.models.app_models import FileSizeLimits, ToolkitState, ToolView, VariantSlot
from genome_toolkit.models.comparison_models import ComparisonBucket
from genome_toolkit.models.parser_models import SequenceFormat, Variant
from genome_toolkit.ui.logic import AppLogic

VARIANTS_A = "chrom,pos,ref,alt\nchr1,100,A,G\nchr1,200,C,T"
VARIANTS_B = "chrom,pos,ref,alt\nchr1,200,C,T\nchr3,7,G,A"


@pytest.fixture
def app_logic():
    return AppLogic(ToolkitState(), FileSizeLimits(1, 1, 2))


class TestToolkitState:
    """Tests for state transitions."""

    def test_set_active_view_clears_error(self):
        state = ToolkitState(error="boom")
        state.set_active_view(ToolView.GC)
        assert state.active_view == ToolView.GC
        assert state.error is None

    def test_clear_single_variant_slot(self):
        state = ToolkitState()
        state.set_variant_file(VariantSlot.A, [Variant("chr1", 1, "A", "G")], "a.csv")
        state.set_variant_file(VariantSlot.B, [Variant("chr1", 1, "A", "G")], "b.csv")
        state.clear_variant_files(VariantSlot.A)
        assert state.variant_file_a is None
        assert state.variant_file_name_a == ""
        assert state.variant_file_b is not None

    def test_upload_id_tracks_slot(self):
        state = ToolkitState()
        state.set_variant_file(VariantSlot.A, [Variant("chr1", 1, "A", "G")], "a.csv", upload_id="u1")
        assert state.has_variant_upload(VariantSlot.A, "u1")
        assert not state.has_variant_upload(VariantSlot.A, "u2")
        assert not state.has_variant_upload(VariantSlot.B, "u1")
        state.clear_variant_files(VariantSlot.A)
        assert not state.has_variant_upload(VariantSlot.A, "u1")

    def test_clear_all_variant_slots(self):
        state = ToolkitState()
        state.set_variant_file(VariantSlot.B, [], "b.csv")
        state.clear_variant_files()
        assert state.variant_file_a is None and state.variant_file_b is None


class TestLoadSequenceFile:
    """Tests for loading sequence files into state."""

    def test_load_fasta(self, app_logic):
        result = app_logic.load_sequence_file(">seq1\nATCGATCG", "seq1.fasta", size_bytes=17)
        assert result.success
        dataset = app_logic.state.active_dataset
        assert dataset is result.record
        assert dataset.stats.gc_percent == 50.0
        assert app_logic.state.active_view == ToolView.ANALYZER
        assert app_logic.state.error is None

    def test_load_fastq(self, app_logic):
        result = app_logic.load_sequence_file("@r1\nACGT\n+\nIIII", "r1.fq")
        assert result.record.format == SequenceFormat.FASTQ
        assert result.record.stats.mean_quality == 40.0

    def test_malformed_file_sets_error_and_keeps_previous_dataset(self, app_logic):
        app_logic.load_sequence_file(">good\nACGT", "good.fa")
        result = app_logic.load_sequence_file("ATCG", "bad.fa")
        assert not result.success
        assert "first line must start with" in result.error
        assert app_logic.state.error == result.error
        assert app_logic.state.active_dataset.header == "good"

    def test_unsupported_extension(self, app_logic):
        result = app_logic.load_sequence_file(">s\nACGT", "s.txt")
        assert not result.success
        assert "Unsupported file type" in result.error

    def test_file_over_size_limit_is_rejected(self, app_logic):
        result = app_logic.load_sequence_file(">s\nACGT", "big.fa", size_bytes=2 * 1024 * 1024)
        assert not result.success
        assert "File too large" in result.error
        assert app_logic.state.active_dataset is None

    def test_load_utf8_upload(self, app_logic):
        result = app_logic.load_sequence_upload(">s\nACGT".encode("utf-8"), "s.fa")
        assert result.success
        assert app_logic.state.active_dataset.sequence == "ACGT"

    def test_non_utf8_upload_sets_error(self, app_logic):
        result = app_logic.load_sequence_upload(b">s\xe9q\nACGT", "s.fa")
        assert not result.success
        assert "not valid UTF-8" in result.error
        assert app_logic.state.error == result.error
        assert app_logic.state.active_dataset is None

    def test_clear_sequence(self, app_logic):
        app_logic.load_sequence_file(">s\nACGT", "s.fa")
        app_logic.clear_sequence()
        assert app_logic.state.active_dataset is None


class TestSequenceTools:
    """Tests for motif, GC and FASTA actions on the active dataset."""

    def test_tools_without_dataset(self, app_logic):
        assert app_logic.search_motif("AC") == []
        assert app_logic.compute_gc_series(3) == []
        assert app_logic.active_sequence_as_fasta() is None

    def test_search_motif_trims_input(self, app_logic):
        app_logic.load_sequence_file(">s\nAAA", "s.fa")
        assert [m.position for m in app_logic.search_motif("  aa ")] == [1, 2]

    def test_invalid_window_sets_error(self, app_logic):
        app_logic.load_sequence_file(">s\nACGT", "s.fa")
        assert app_logic.compute_gc_series(10) == []
        assert "cannot exceed" in app_logic.state.error

    def test_gc_series(self, app_logic):
        app_logic.load_sequence_file(">s\nGGAA", "s.fa")
        assert [w.gc_percent for w in app_logic.compute_gc_series(2)] == [100.0, 50.0, 0.0]

    def test_active_sequence_as_fasta(self, app_logic):
        app_logic.load_sequence_file(">seq1\nacgt", "s.fa")
        assert app_logic.active_sequence_as_fasta() == ">seq1\nACGT\n"


class TestVariantWorkflow:
    """Tests for loading, comparing and exporting variant files."""

    def test_compare_requires_both_files(self, app_logic):
        app_logic.load_variant_file(VariantSlot.A, VARIANTS_A, "a.csv")
        assert app_logic.compare_loaded_variants() is None
        assert "both variant files" in app_logic.state.error

    def test_load_compare_and_export(self, app_logic):
        assert app_logic.load_variant_file(VariantSlot.A, VARIANTS_A, "sampleA.csv").success
        assert app_logic.load_variant_file(VariantSlot.B, VARIANTS_B, "sampleB.csv").success

        comparison = app_logic.compare_loaded_variants()
        assert comparison.summary.shared_count == 1
        assert app_logic.state.comparison is comparison

        calls = []
        content = app_logic.export_comparison(
            ComparisonBucket.UNIQUE_TO_B, lambda name, data, mime: calls.append((name, data, mime))
        )
        assert content == "chrom,pos,ref,alt\nchr3,7,G,A"
        assert calls[0][0] == "unique_to_sampleB.csv"

    def test_reloading_a_slot_drops_stale_comparison(self, app_logic):
        app_logic.load_variant_file(VariantSlot.A, VARIANTS_A, "a.csv")
        app_logic.load_variant_file(VariantSlot.B, VARIANTS_B, "b.csv")
        app_logic.compare_loaded_variants()
        app_logic.load_variant_file(VariantSlot.B, VARIANTS_A, "c.csv")
        assert app_logic.state.comparison is None

    def test_bad_variant_file_reports_error(self, app_logic):
        result = app_logic.load_variant_file(VariantSlot.B, "chrom,pos\nchr1,1", "b.csv")
        assert not result.success
        assert result.slot == VariantSlot.B
        assert "Missing required columns" in app_logic.state.error
        assert app_logic.state.variant_file_b is None

    def test_csv_size_limit(self, app_logic):
        result = app_logic.load_variant_file(VariantSlot.A, VARIANTS_A, "a.csv", size_bytes=3 * 1024 * 1024)
        assert not result.success
        assert "Maximum: 2 MB" in result.error

    def test_export_without_comparison(self, app_logic):
        assert app_logic.export_comparison(ComparisonBucket.SHARED, lambda *args: None) is None

    def test_non_utf8_variant_upload_sets_error(self, app_logic):
        result = app_logic.load_variant_upload(VariantSlot.A, b"chrom,pos,ref,alt\nchr\xff1,1,A,G", "a.csv", "u1")
        assert not result.success
        assert "not valid UTF-8" in app_logic.state.error
        assert app_logic.state.variant_file_a is None
        assert not app_logic.state.has_variant_upload(VariantSlot.A, "u1")

    def test_replacing_upload_with_same_name(self, app_logic):
        app_logic.load_variant_upload(VariantSlot.A, VARIANTS_A.encode(), "a.csv", "u1")
        app_logic.load_variant_upload(VariantSlot.A, VARIANTS_B.encode(), "a.csv", "u2")
        state = app_logic.state
        assert state.variant_file_name_a == "a.csv"
        assert state.has_variant_upload(VariantSlot.A, "u2")
        assert [v.chrom for v in state.variant_file_a] == ["chr1", "chr3"]
