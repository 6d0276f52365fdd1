"""
Genre Analyzer

Ranks the genres of a record set by how many records carry them.
"""

from typing import List, Sequence
from collections import Counter
import logging

from chartscope.core.chart_store import Record, GenreCount

logger = logging.getLogger(__name__)

UNKNOWN_GENRE = "Unknown"


def genre_distribution(records: Sequence[Record], genre_field: str = "genre") -> List[GenreCount]:
    """
    Count records per genre value.

    Records with a missing or empty genre field are counted under
    "Unknown". The result is sorted by count, highest first; genres with
    equal counts keep the order in which they were first seen.

    Args:
        records: Records to aggregate
        genre_field: Column holding the genre (exact key)

    Returns:
        Ranked genre counts
    """
    counts = Counter(record.get(genre_field) or UNKNOWN_GENRE for record in records)

    # most_common() is a stable sort, ties stay in first-seen order
    distribution = [GenreCount(genre=genre, count=count) for genre, count in counts.most_common()]
    logger.debug(f"Found {len(distribution)} genres in {len(records)} records ({genre_field})")
    return distribution
