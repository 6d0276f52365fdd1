"""Core loaders and analyzers for ChartScope."""

from chartscope.core.errors import (
    ChartScopeError,
    DatasetNotFoundError,
    CSVParseError,
    InvalidRequestError,
)
from chartscope.core.chart_store import (
    Record,
    Dataset,
    GenreCount,
    ArtistOverlap,
    ColumnKind,
    LoadResult,
    ValidationReport,
    UploadAnalysis,
)
from chartscope.core.csv_loader import (
    normalize_row,
    is_valid_row,
    read_records,
    load_dataset,
    load_dataset_bytes,
    load_datasets,
)
from chartscope.core.genre_analyzer import genre_distribution
from chartscope.core.cross_platform import cross_platform_artists
from chartscope.core.search import search_records
from chartscope.core.type_sniffer import sniff_column_types, validate_structure

__all__ = [
    "ChartScopeError",
    "DatasetNotFoundError",
    "CSVParseError",
    "InvalidRequestError",
    "Record",
    "Dataset",
    "GenreCount",
    "ArtistOverlap",
    "ColumnKind",
    "LoadResult",
    "ValidationReport",
    "UploadAnalysis",
    "normalize_row",
    "is_valid_row",
    "read_records",
    "load_dataset",
    "load_dataset_bytes",
    "load_datasets",
    "genre_distribution",
    "cross_platform_artists",
    "search_records",
    "sniff_column_types",
    "validate_structure",
]
