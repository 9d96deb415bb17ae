import logging

from pydantic_settings import BaseSettings

from .constants.constants import *
from .models.app_models import FileSizeLimits

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Upload limits, enforced by the caller before parsing
    max_fasta_size_mb: float = DEFAULT_MAX_FASTA_SIZE_MB
    max_fastq_size_mb: float = DEFAULT_MAX_FASTQ_SIZE_MB
    max_csv_size_mb: float = DEFAULT_MAX_CSV_SIZE_MB

    # Output and display
    fasta_line_width: int = 60
    preview_max_bases: int = MAX_PREVIEW_BASES

    log_level: str = "INFO"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        for name in ("max_fasta_size_mb", "max_fastq_size_mb", "max_csv_size_mb"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be greater than 0.")

        if self.fasta_line_width <= 0:
            raise ValueError("FASTA_LINE_WIDTH must be greater than 0.")

    def size_limits(self) -> FileSizeLimits:
        return FileSizeLimits(
            max_fasta_size_mb=self.max_fasta_size_mb,
            max_fastq_size_mb=self.max_fastq_size_mb,
            max_csv_size_mb=self.max_csv_size_mb,
        )

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }


settings = Settings()
