import logging
from typing import Optional

from ..constants.constants import *
from ..exceptions import FormatError, ToolkitError, ValidationError
from ..models.app_models import (
    FileSizeLimits,
    SequenceLoadResult,
    ToolkitState,
    ToolView,
    VariantLoadResult,
    VariantSlot,
)
from ..models.bio_models import GCWindow, MotifMatch
from ..models.comparison_models import ComparisonBucket, VariantComparison
from ..settings import settings
from ..tools.bio.gc_windows import compute_gc_windows
from ..tools.bio.motif_search import find_motif
from ..tools.bio.sequence_parser import file_extension, format_fasta, parse_sequence_file
from ..tools.bio.sequence_stats import attach_stats
from ..tools.export.csv_exporter import (
    Downloader,
    comparison_export_name,
    export_to_csv,
    variants_to_rows,
)
from ..tools.variant.variant_compare import compare_variants
from ..tools.variant.variant_csv_parser import parse_variant_csv

logger = logging.getLogger(__name__)


class AppLogic:
    """Runs the toolkit routines on behalf of a front end.

    The routines themselves raise on bad input; this layer catches those errors,
    records the message on the caller's ToolkitState and reports failure.
    """

    def __init__(self, state: Optional[ToolkitState] = None, limits: Optional[FileSizeLimits] = None) -> None:
        self.state = state if state is not None else ToolkitState()
        self.limits = limits or settings.size_limits()
        self.settings = settings

    def size_limit_mb(self, file_name: str) -> float:
        ext = file_extension(file_name)
        if ext in FASTA_EXTENSIONS:
            return self.limits.max_fasta_size_mb
        if ext in FASTQ_EXTENSIONS:
            return self.limits.max_fastq_size_mb
        if ext in CSV_EXTENSIONS:
            return self.limits.max_csv_size_mb
        raise FormatError(f"Unsupported file type: .{ext}", file_name)

    def check_file_size(self, file_name: str, size_bytes: int) -> None:
        limit_mb = self.size_limit_mb(file_name)
        size_mb = size_bytes / BYTES_PER_MB
        if size_mb > limit_mb:
            raise ValidationError(
                f"{file_name}: File too large ({size_mb:.1f} MB). Maximum: {limit_mb:g} MB."
            )

    def _fail(self, message: str) -> str:
        logger.error(message)
        self.state.set_error(message)
        return message

    @staticmethod
    def decode_upload(data: bytes, file_name: str) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatError(
                f"File is not valid UTF-8 text (undecodable byte at offset {e.start}).", file_name
            ) from None

    def load_sequence_upload(self, data: bytes, file_name: str) -> SequenceLoadResult:
        try:
            text = self.decode_upload(data, file_name)
        except FormatError as e:
            return SequenceLoadResult(success=False, error=self._fail(str(e)))
        return self.load_sequence_file(text, file_name, size_bytes=len(data))

    def load_sequence_file(
        self, text: str, file_name: str, size_bytes: Optional[int] = None
    ) -> SequenceLoadResult:
        try:
            if size_bytes is not None:
                self.check_file_size(file_name, size_bytes)
            record = attach_stats(parse_sequence_file(text, file_name))
        except ToolkitError as e:
            return SequenceLoadResult(success=False, error=self._fail(str(e)))

        self.state.set_dataset(record)
        self.state.set_active_view(ToolView.ANALYZER)
        logger.info(f"Loaded {record.format.value} file {file_name} ({record.length:,} bp)")
        return SequenceLoadResult(success=True, record=record)

    def clear_sequence(self) -> None:
        self.state.clear_dataset()

    def load_variant_file(
        self,
        slot: VariantSlot,
        text: str,
        file_name: str,
        size_bytes: Optional[int] = None,
        upload_id: Optional[str] = None,
    ) -> VariantLoadResult:
        try:
            if size_bytes is not None:
                self.check_file_size(file_name, size_bytes)
            variants = parse_variant_csv(text, file_name)
        except ToolkitError as e:
            return VariantLoadResult(success=False, slot=slot, error=self._fail(str(e)))

        self.state.set_variant_file(slot, variants, file_name, upload_id)
        self.state.set_error(None)
        logger.info(f"Loaded {len(variants)} variants from {file_name} into slot {slot.value}")
        return VariantLoadResult(success=True, slot=slot, variants=variants)

    def load_variant_upload(
        self, slot: VariantSlot, data: bytes, file_name: str, upload_id: Optional[str] = None
    ) -> VariantLoadResult:
        try:
            text = self.decode_upload(data, file_name)
        except FormatError as e:
            return VariantLoadResult(success=False, slot=slot, error=self._fail(str(e)))
        return self.load_variant_file(slot, text, file_name, size_bytes=len(data), upload_id=upload_id)

    def compare_loaded_variants(self) -> Optional[VariantComparison]:
        if self.state.variant_file_a is None or self.state.variant_file_b is None:
            self._fail("Load both variant files before comparing.")
            return None

        comparison = compare_variants(self.state.variant_file_a, self.state.variant_file_b)
        self.state.comparison = comparison
        return comparison

    def search_motif(self, motif: str) -> list[MotifMatch]:
        dataset = self.state.active_dataset
        if dataset is None:
            return []
        return find_motif(dataset.sequence, motif.strip())

    def compute_gc_series(self, window_size: int) -> list[GCWindow]:
        dataset = self.state.active_dataset
        if dataset is None:
            return []
        try:
            return compute_gc_windows(dataset.sequence, window_size)
        except ValidationError as e:
            self._fail(str(e))
            return []

    def export_comparison(self, bucket: ComparisonBucket, download: Downloader) -> Optional[str]:
        comparison = self.state.comparison
        if comparison is None:
            return None

        filename = comparison_export_name(
            bucket, self.state.variant_file_name_a, self.state.variant_file_name_b
        )
        return export_to_csv(variants_to_rows(comparison.bucket(bucket)), filename, download)

    def active_sequence_as_fasta(self) -> Optional[str]:
        dataset = self.state.active_dataset
        if dataset is None:
            return None
        return format_fasta(dataset, line_width=self.settings.fasta_line_width)
