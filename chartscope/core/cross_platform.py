"""
Cross-Platform Matcher

Finds artists that chart on more than one platform.

Artist names are joined by exact string match across heterogeneous chart
files: "Drake" and "drake " are different artists here. The artist is read
from the "artist" column, falling back to "Artist"; other spellings of the
column are not looked at.
"""

from typing import Dict, List, Sequence, Tuple, Union
import logging

from chartscope.core.chart_store import Record, Dataset, ArtistOverlap

logger = logging.getLogger(__name__)

ARTIST_KEYS = ("artist", "Artist")

DatasetLike = Union[Dataset, Tuple[str, Sequence[Record]]]


def extract_artist(record: Record):
    """Return the record's artist, or None if it has none."""
    for key in ARTIST_KEYS:
        value = record.get(key)
        if value:
            return value
    return None


def _unpack(dataset: DatasetLike, index: int) -> Tuple[str, Sequence[Record]]:
    if isinstance(dataset, Dataset):
        platform, records = dataset.platform, dataset.records
    else:
        platform, records = dataset
    return platform or f"Platform_{index}", records


def cross_platform_artists(datasets: Sequence[DatasetLike]) -> List[ArtistOverlap]:
    """
    Find artists appearing on two or more distinct platforms.

    Args:
        datasets: Dataset objects or (platform, records) pairs

    Returns:
        Overlaps sorted by number of platforms, highest first. Ties keep
        the order in which artists were first seen.
    """
    # dict-as-ordered-set keeps platforms in first-seen order
    artist_platforms: Dict[str, Dict[str, None]] = {}

    for index, dataset in enumerate(datasets):
        platform, records = _unpack(dataset, index)
        for record in records:
            artist = extract_artist(record)
            if not artist:
                continue
            artist_platforms.setdefault(artist, {})[platform] = None

    overlaps = [
        ArtistOverlap(artist=artist, platforms=list(platforms))
        for artist, platforms in artist_platforms.items()
        if len(platforms) > 1
    ]
    overlaps.sort(key=lambda o: o.platform_count, reverse=True)

    logger.info(f"{len(overlaps)} of {len(artist_platforms)} artists appear on multiple platforms")
    return overlaps
