# File formats
FASTA_HEADER_MARKER = ">"
FASTQ_HEADER_MARKER = "@"
FASTQ_SEPARATOR_MARKER = "+"
FASTQ_LINES_PER_RECORD = 4
PHRED_OFFSET = 33

IUPAC_NUCLEOTIDES = frozenset("ATCGNRYSWKMBDHV")
COUNTED_BASES = ("A", "T", "C", "G", "N")
GC_BASES = frozenset("GC")

FASTA_EXTENSIONS = ("fasta", "fa")
FASTQ_EXTENSIONS = ("fastq", "fq")
CSV_EXTENSIONS = ("csv",)

# Variant CSV
VARIANT_REQUIRED_COLUMNS = ("chrom", "pos", "ref", "alt")
CSV_DELIMITER = ","

# Analysis
PERCENTAGE_MULTIPLIER = 100
MOTIF_CONTEXT_RADIUS = 10
GC_WINDOW_MIN_DEFAULT = 10
GC_WINDOW_MAX_DEFAULT = 5000
GC_WINDOW_TARGET_COUNT = 100
GC_CHART_MAX_LABELS = 50

# Export
CSV_MIME_TYPE = "text/csv"
FASTA_MIME_TYPE = "text/plain"
CSV_QUOTE_TRIGGERS = (",", '"', "\n")
SHARED_VARIANTS_FILENAME = "shared_variants.csv"
UNIQUE_VARIANTS_FILENAME_TEMPLATE = "unique_to_{stem}.csv"

# Size limits
BYTES_PER_MB = 1024 * 1024
DEFAULT_MAX_FASTA_SIZE_MB = 5
DEFAULT_MAX_FASTQ_SIZE_MB = 5
DEFAULT_MAX_CSV_SIZE_MB = 10

# UI
APP_TITLE = "genome-toolkit"
MAX_PREVIEW_BASES = 500
MOTIF_RESULTS_DISPLAY_LIMIT = 200
