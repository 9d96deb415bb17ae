import logging
from typing import Any, Callable, Optional

from ...constants.constants import *
from ...models.comparison_models import ComparisonBucket
from ...models.parser_models import Variant

logger = logging.getLogger(__name__)

# (file_name, data, mime_type); Streamlit's download_button fits this shape
Downloader = Callable[[str, bytes, str], Any]


def _format_field(value: Any) -> str:
    text = "" if value is None else str(value)
    if any(trigger in text for trigger in CSV_QUOTE_TRIGGERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv_text(rows: list[dict[str, Any]]) -> str:
    if not rows:
        return ""

    headers = list(rows[0].keys())
    lines = [CSV_DELIMITER.join(headers)]
    for row in rows:
        lines.append(CSV_DELIMITER.join(_format_field(row.get(key)) for key in headers))
    return "\n".join(lines)


def export_to_csv(
    rows: list[dict[str, Any]], filename: str, download: Downloader
) -> Optional[str]:
    if not rows:
        logger.warning("export_to_csv: No data to export.")
        return None

    content = to_csv_text(rows)
    download(filename, content.encode("utf-8"), CSV_MIME_TYPE)
    logger.info(f"Exported {len(rows)} rows to {filename}")
    return content


def variants_to_rows(variants: list[Variant]) -> list[dict[str, Any]]:
    return [variant.to_dict() for variant in variants]


def _file_stem(file_name: str) -> str:
    return file_name.replace(".csv", "", 1)


def comparison_export_name(bucket: ComparisonBucket, file_name_a: str, file_name_b: str) -> str:
    if bucket is ComparisonBucket.SHARED:
        return SHARED_VARIANTS_FILENAME
    source = file_name_a if bucket is ComparisonBucket.UNIQUE_TO_A else file_name_b
    return UNIQUE_VARIANTS_FILENAME_TEMPLATE.format(stem=_file_stem(source))
