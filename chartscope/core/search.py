"""
Search Filter

Free-text search over chart records with an optional genre constraint.
Platform filtering happens before loading, by choosing which chart files
are read (see ChartAnalyzer.search).
"""

from typing import List, Optional, Sequence
import logging

from chartscope.core.chart_store import Record
from chartscope.core.errors import InvalidRequestError

logger = logging.getLogger(__name__)

GENRE_KEYS = ("genre", "Primary_Genre")


def matches_query(record: Record, query: str) -> bool:
    """Check whether any populated value of the record contains the query."""
    needle = query.lower()
    return any(value and needle in str(value).lower() for value in record.values())


def matches_genre(record: Record, genre: str) -> bool:
    """Check the record's genre or Primary_Genre column against a filter."""
    needle = genre.lower()
    for key in GENRE_KEYS:
        value = record.get(key)
        if value and needle in str(value).lower():
            return True
    return False


def search_records(
    records: Sequence[Record],
    query: str,
    genre_filter: Optional[str] = None,
) -> List[Record]:
    """
    Filter records by a case-insensitive substring query.

    Args:
        records: Records to search
        query: Text to look for in any column (required)
        genre_filter: Optional genre substring

    Returns:
        Matching records in input order

    Raises:
        InvalidRequestError: If the query is empty
    """
    if not query:
        raise InvalidRequestError("Search query is required")

    results = [
        record for record in records
        if matches_query(record, query) and (not genre_filter or matches_genre(record, genre_filter))
    ]
    logger.debug(f"Search '{query}' (genre={genre_filter}) matched {len(results)} of {len(records)} records")
    return results
