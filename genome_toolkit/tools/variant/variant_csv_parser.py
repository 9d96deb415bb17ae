import logging
import re

from ...constants.constants import *
from ...exceptions import FormatError
from ...models.parser_models import Variant

logger = logging.getLogger(__name__)

LINE_SPLIT_PATTERN = re.compile(r"\r?\n")
INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def _split_fields(line: str) -> list[str]:
    # Plain comma split: quoted fields containing commas are not supported
    return [field.strip() for field in line.split(CSV_DELIMITER)]


def _locate_columns(header_line: str, file_name: str) -> dict[str, int]:
    headers = [h.lower() for h in _split_fields(header_line)]

    columns = {}
    missing = []
    for name in VARIANT_REQUIRED_COLUMNS:
        if name in headers:
            columns[name] = headers.index(name)
        else:
            missing.append(name)

    if missing:
        raise FormatError(
            f"Missing required columns: {', '.join(missing)}. "
            f"Expected CSV headers: {', '.join(VARIANT_REQUIRED_COLUMNS)}",
            file_name,
        )
    return columns


def _parse_position(value: str, file_name: str, line_number: int) -> int:
    if not INTEGER_PATTERN.fullmatch(value):
        raise FormatError(f'"pos" value "{value}" is not a valid number.', file_name, line_number)
    return int(value)


def parse_variant_csv(text: str, file_name: str) -> list[Variant]:
    lines = LINE_SPLIT_PATTERN.split(text.strip())

    if len(lines) < 2:
        raise FormatError("CSV must have a header row and at least one data row.", file_name)

    columns = _locate_columns(lines[0], file_name)
    max_index = max(columns.values())

    variants = []
    for line_number, line in enumerate(lines[1:], start=2):
        line = line.strip()
        if not line:
            continue

        fields = _split_fields(line)
        if len(fields) <= max_index:
            raise FormatError("not enough columns.", file_name, line_number)

        variants.append(
            Variant(
                chrom=fields[columns["chrom"]],
                pos=_parse_position(fields[columns["pos"]], file_name, line_number),
                ref=fields[columns["ref"]].upper(),
                alt=fields[columns["alt"]].upper(),
            )
        )

    if not variants:
        raise FormatError("No valid variant rows found.", file_name)

    logger.debug(f"Parsed {len(variants)} variants from {file_name}")
    return variants
