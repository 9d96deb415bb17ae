from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .comparison_models import VariantComparison
from .parser_models import SequenceRecord, Variant


class ToolView(Enum):
    LOAD = "load"
    ANALYZER = "analyzer"
    MOTIF = "motif"
    GC = "gc"
    VARIANTS = "variants"


class VariantSlot(Enum):
    A = "A"
    B = "B"


@dataclass(frozen=True)
class FileSizeLimits:
    max_fasta_size_mb: float
    max_fastq_size_mb: float
    max_csv_size_mb: float


@dataclass
class ToolkitState:
    """Session state owned by the caller and passed into AppLogic.

    Holds at most one active sequence dataset and two variant files.
    Replacing or clearing a field discards the previous value.
    """

    active_dataset: Optional[SequenceRecord] = None
    variant_file_a: Optional[list[Variant]] = None
    variant_file_b: Optional[list[Variant]] = None
    variant_file_name_a: str = ""
    variant_file_name_b: str = ""
    comparison: Optional[VariantComparison] = None
    variant_upload_ids: dict[VariantSlot, str] = field(default_factory=dict)
    active_view: ToolView = ToolView.LOAD
    error: Optional[str] = None

    def set_dataset(self, record: SequenceRecord) -> None:
        self.active_dataset = record
        self.error = None

    def clear_dataset(self) -> None:
        self.active_dataset = None
        self.error = None

    def set_variant_file(
        self,
        slot: VariantSlot,
        variants: list[Variant],
        file_name: str,
        upload_id: Optional[str] = None,
    ) -> None:
        if slot is VariantSlot.A:
            self.variant_file_a = variants
            self.variant_file_name_a = file_name
        else:
            self.variant_file_b = variants
            self.variant_file_name_b = file_name
        if upload_id is None:
            self.variant_upload_ids.pop(slot, None)
        else:
            self.variant_upload_ids[slot] = upload_id
        self.comparison = None

    def clear_variant_files(self, slot: Optional[VariantSlot] = None) -> None:
        if slot in (None, VariantSlot.A):
            self.variant_file_a = None
            self.variant_file_name_a = ""
        if slot in (None, VariantSlot.B):
            self.variant_file_b = None
            self.variant_file_name_b = ""
        if slot is None:
            self.variant_upload_ids.clear()
        else:
            self.variant_upload_ids.pop(slot, None)
        self.comparison = None

    def has_variant_upload(self, slot: VariantSlot, upload_id: str) -> bool:
        return self.variant_upload_ids.get(slot) == upload_id

    def set_active_view(self, view: ToolView) -> None:
        self.active_view = view
        self.error = None

    def set_error(self, message: Optional[str]) -> None:
        self.error = message


@dataclass
class SequenceLoadResult:
    success: bool
    record: Optional[SequenceRecord] = None
    error: Optional[str] = None


@dataclass
class VariantLoadResult:
    success: bool
    slot: Optional[VariantSlot] = None
    variants: list[Variant] = field(default_factory=list)
    error: Optional[str] = None
