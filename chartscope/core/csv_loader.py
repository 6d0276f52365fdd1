"""
CSV Loader

Streams chart CSV files into lists of normalized, validated records.

Every header key and cell value goes through the same normalizer, and a
row is kept only when it carries at least one populated title, artist or
genre-like column. Loading is all-or-nothing per file; multi-file loads
isolate failures so one broken chart does not hide the others.
"""

from typing import Dict, List, Optional, Any, Iterable, Sequence, Tuple
import csv
import io
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from chartscope.core.chart_store import Record, LoadResult
from chartscope.core.errors import ChartScopeError, CSVParseError, DatasetNotFoundError

logger = logging.getLogger(__name__)

ESSENTIAL_FIELDS = ("title", "artist", "genre")

_EDGE_JUNK = re.compile(r"^[\ufeff\s]+|[\ufeff\s]+$")


def normalize_row(raw: Dict[Any, Any]) -> Record:
    """
    Strip byte-order marks and whitespace from a parsed row.

    Keys and string values lose byte-order marks and whitespace at both
    ends; anything else passes through untouched.

    Args:
        raw: Row as produced by the CSV reader

    Returns:
        Cleaned copy of the row
    """
    cleaned: Record = {}
    for key, value in raw.items():
        if isinstance(key, str):
            key = _EDGE_JUNK.sub("", key)
        cleaned[key] = _EDGE_JUNK.sub("", value) if isinstance(value, str) else value
    return cleaned


def is_valid_row(record: Record) -> bool:
    """Check that a row has at least one populated title/artist/genre column."""
    return any(
        isinstance(key, str) and field_name in key.lower() and bool(value)
        for field_name in ESSENTIAL_FIELDS
        for key, value in record.items()
    )


def read_records(lines: Iterable[str], source: str = "<stream>") -> List[Record]:
    """
    Parse CSV text lines into validated records.

    Args:
        lines: Iterable of text lines, header first
        source: Name used in log and error messages

    Returns:
        Records that passed validation, in file order

    Raises:
        CSVParseError: If the tokenizer rejects the stream
    """
    reader = csv.DictReader(lines, strict=True)
    records: List[Record] = []
    rejected = 0

    try:
        for raw in reader:
            record = normalize_row(raw)
            if is_valid_row(record):
                records.append(record)
            else:
                rejected += 1
    except csv.Error as e:
        raise CSVParseError(source, str(e), reader.line_num) from e
    except UnicodeDecodeError as e:
        raise CSVParseError(source, f"not valid UTF-8 ({e.reason})", reader.line_num) from e

    if rejected:
        logger.debug(f"Dropped {rejected} rows without title/artist/genre from {source}")
    return records


def load_dataset(path) -> List[Record]:
    """
    Load one chart CSV file.

    Args:
        path: Path to the CSV file

    Returns:
        Normalized, validated records in file order

    Raises:
        DatasetNotFoundError: If the file does not exist
        CSVParseError: If the file is not well-formed CSV
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DatasetNotFoundError(str(file_path))

    with open(file_path, "r", encoding="utf-8", newline="") as f:
        records = read_records(f, source=str(file_path))

    logger.info(f"Loaded {len(records)} records from {file_path.name}")
    return records


def load_dataset_bytes(data: bytes, source: str = "<upload>") -> List[Record]:
    """Load records from raw CSV bytes, such as an in-memory upload."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CSVParseError(source, f"not valid UTF-8 ({e.reason})") from e
    return read_records(io.StringIO(text, newline=""), source=source)


def _load_one(platform: str, path: str) -> LoadResult:
    try:
        records = load_dataset(path)
    except (ChartScopeError, OSError) as e:
        logger.warning(f"Could not load {Path(path).name} for {platform}: {e}")
        return LoadResult(platform=platform, path=str(path), error=str(e))
    return LoadResult(platform=platform, path=str(path), records=records)


def load_datasets(
    sources: Sequence[Tuple[str, str]],
    max_workers: Optional[int] = None,
) -> List[LoadResult]:
    """
    Load several chart files in parallel.

    A failure in one file is recorded on its LoadResult and does not
    affect the others.

    Args:
        sources: (platform, path) pairs
        max_workers: Thread pool size (defaults to one thread per file)

    Returns:
        One LoadResult per source, in input order
    """
    if not sources:
        return []

    workers = max_workers or len(sources)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_load_one, platform, str(path))
            for platform, path in sources
        ]
        results = [future.result() for future in futures]

    failed = [r.platform for r in results if not r.ok]
    if failed:
        logger.warning(f"{len(failed)} of {len(results)} chart files failed to load: {', '.join(failed)}")
    return results
