import logging
import re
import uuid
from io import StringIO
from typing import Callable

from Bio.Seq import Seq
from Bio.SeqIO.FastaIO import FastaWriter
from Bio.SeqRecord import SeqRecord

from ...constants.constants import *
from ...exceptions import FormatError
from ...models.parser_models import SequenceFormat, SequenceRecord

logger = logging.getLogger(__name__)

LINE_SPLIT_PATTERN = re.compile(r"\r?\n")

FILE_EXTENSION_MAP = {
    **{ext: SequenceFormat.FASTA for ext in FASTA_EXTENSIONS},
    **{ext: SequenceFormat.FASTQ for ext in FASTQ_EXTENSIONS},
}


def _split_non_empty_lines(text: str) -> list[str]:
    return [line for line in LINE_SPLIT_PATTERN.split(text.strip()) if line]


def _new_record_id() -> str:
    return uuid.uuid4().hex


def parse_fasta(text: str, file_name: str) -> SequenceRecord:
    lines = _split_non_empty_lines(text)

    if not lines:
        raise FormatError("File is empty. Please upload a valid FASTA file.", file_name)

    if not lines[0].startswith(FASTA_HEADER_MARKER):
        raise FormatError(
            f'Invalid FASTA format: the first line must start with "{FASTA_HEADER_MARKER}" '
            "followed by a header description.",
            file_name,
            line=1,
        )

    header = lines[0][len(FASTA_HEADER_MARKER):].strip()

    # Single-record semantics: anything from the second header onwards is dropped
    sequence_lines = []
    for line in lines[1:]:
        if line.startswith(FASTA_HEADER_MARKER):
            logger.debug(f"{file_name}: ignoring additional FASTA records after the first")
            break
        sequence_lines.append(line.strip())

    sequence = "".join(sequence_lines).upper()

    if not sequence:
        raise FormatError("No sequence data found after the header line.", file_name)

    invalid = sorted(set(sequence) - IUPAC_NUCLEOTIDES)
    if invalid:
        shown = ", ".join(repr(c) for c in invalid)
        raise FormatError(
            f"Sequence contains invalid characters ({shown}). "
            "Expected IUPAC nucleotide codes (A, T, C, G, N, ...).",
            file_name,
        )

    return SequenceRecord(
        id=_new_record_id(),
        file_name=file_name,
        format=SequenceFormat.FASTA,
        header=header,
        sequence=sequence,
    )


def parse_fastq(text: str, file_name: str) -> SequenceRecord:
    lines = _split_non_empty_lines(text)

    if len(lines) < FASTQ_LINES_PER_RECORD:
        raise FormatError(
            "Invalid FASTQ format: expected at least 4 lines "
            "(header, sequence, separator, quality).",
            file_name,
        )

    sequences: list[str] = []
    qualities: list[int] = []
    header = ""

    for i in range(0, len(lines), FASTQ_LINES_PER_RECORD):
        if not lines[i].startswith(FASTQ_HEADER_MARKER):
            raise FormatError(
                f'Invalid FASTQ format: expected header starting with "{FASTQ_HEADER_MARKER}".',
                file_name,
                line=i + 1,
            )
        if i == 0:
            header = lines[i][len(FASTQ_HEADER_MARKER):].strip()

        if i + 1 >= len(lines):
            raise FormatError("Unexpected end of file: missing sequence line.", file_name, line=i + 2)
        seq_line = lines[i + 1].strip().upper()

        if i + 2 >= len(lines) or not lines[i + 2].startswith(FASTQ_SEPARATOR_MARKER):
            raise FormatError(
                f'Invalid FASTQ format: expected "{FASTQ_SEPARATOR_MARKER}" separator.',
                file_name,
                line=i + 3,
            )

        if i + 3 >= len(lines):
            raise FormatError("Unexpected end of file: missing quality line.", file_name, line=i + 4)
        qual_line = lines[i + 3].strip()

        if len(qual_line) != len(seq_line):
            raise FormatError(
                f"Quality string length ({len(qual_line)}) does not match "
                f"sequence length ({len(seq_line)}).",
                file_name,
                line=i + 4,
            )

        sequences.append(seq_line)
        qualities.extend(ord(c) - PHRED_OFFSET for c in qual_line)

    sequence = "".join(sequences)

    if not sequence:
        raise FormatError("No sequence data found in the FASTQ file.", file_name)

    return SequenceRecord(
        id=_new_record_id(),
        file_name=file_name,
        format=SequenceFormat.FASTQ,
        header=header,
        sequence=sequence,
        qualities=qualities,
    )


SEQUENCE_PARSERS: dict[SequenceFormat, Callable[[str, str], SequenceRecord]] = {
    SequenceFormat.FASTA: parse_fasta,
    SequenceFormat.FASTQ: parse_fastq,
}


def file_extension(file_name: str) -> str:
    _, dot, ext = file_name.rpartition(".")
    return ext.lower() if dot else ""


def detect_sequence_format(file_name: str) -> SequenceFormat:
    ext = file_extension(file_name)
    try:
        return FILE_EXTENSION_MAP[ext]
    except KeyError:
        supported = ", ".join(f".{e}" for e in FILE_EXTENSION_MAP)
        raise FormatError(f"Unsupported file type: .{ext}. Use {supported}", file_name) from None


def parse_sequence_file(text: str, file_name: str) -> SequenceRecord:
    sequence_format = detect_sequence_format(file_name)
    record = SEQUENCE_PARSERS[sequence_format](text, file_name)
    logger.debug(f"Parsed {file_name} as {sequence_format.value}: {record.length:,} bp")
    return record


def format_fasta(record: SequenceRecord, line_width: int = 60) -> str:
    bio_record = SeqRecord(Seq(record.sequence), id=record.id, description=record.header)

    handle = StringIO()
    writer = FastaWriter(handle, wrap=line_width, record2title=lambda r: r.description)
    writer.write_file([bio_record])
    return handle.getvalue()
