"""
Type Sniffer

Guesses column types for upload validation feedback.

Only the first record is inspected. This is a quick hint for people
uploading a chart file, not real column type inference: a column whose
first value is "12" is a number even if every later row holds text.
"""

from typing import Dict, List, Any, Sequence
import logging
import math

from chartscope.core.chart_store import Record, ColumnKind, ValidationReport
from chartscope.core.csv_loader import ESSENTIAL_FIELDS

logger = logging.getLogger(__name__)


_INFINITY_SPELLINGS = ("Infinity", "+Infinity", "-Infinity")


def _is_number(value: Any) -> bool:
    # float() also takes "1_000", "inf" and "infinity"; those stay text
    if not isinstance(value, str) or "_" in value:
        return False
    try:
        number = float(value)
    except ValueError:
        return False
    if math.isinf(number):
        return value.strip() in _INFINITY_SPELLINGS
    return not math.isnan(number)


def guess_kind(value: Any) -> ColumnKind:
    """Classify a single cell value."""
    if _is_number(value):
        return ColumnKind.NUMBER
    if isinstance(value, str) and ("/" in value or "-" in value):
        return ColumnKind.CATEGORY
    return ColumnKind.STRING


def sniff_column_types(records: Sequence[Record]) -> Dict[str, str]:
    """
    Guess each column's type from the first record.

    Args:
        records: Loaded records

    Returns:
        Column name -> "number", "category" or "string"; empty when there
        are no records
    """
    if not records:
        return {}

    sample = records[0]
    return {key: guess_kind(value).value for key, value in sample.items()}


def validate_structure(
    records: Sequence[Record],
    required_columns: Sequence[str] = ESSENTIAL_FIELDS,
    preview_rows: int = 3,
) -> ValidationReport:
    """
    Check an uploaded chart for the columns analysis relies on.

    A required column counts as present when any header contains its name,
    ignoring case ("Primary_Genre" satisfies "genre").

    Args:
        records: Loaded records
        required_columns: Column names to look for
        preview_rows: Number of records to include as preview

    Returns:
        Validation report
    """
    available: List[str] = list(records[0].keys()) if records else []
    missing = [
        column for column in required_columns
        if not any(column.lower() in str(name).lower() for name in available)
    ]

    if missing:
        logger.info(f"Uploaded chart is missing columns: {', '.join(missing)}")

    return ValidationReport(
        is_valid=not missing,
        row_count=len(records),
        column_count=len(available),
        available_columns=available,
        missing_columns=missing,
        data_types=sniff_column_types(records),
        preview=list(records[:preview_rows]),
    )
