"""
Chart Store

Data structures shared by the loaders, analyzers and the service layer.
Records are plain dicts: column order is the CSV header order and every
aggregation relies on dict insertion order for stable tie-breaking.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum

Record = Dict[str, Any]


class ColumnKind(Enum):
    """Column type guesses produced by the type sniffer."""
    NUMBER = "number"
    CATEGORY = "category"           # Dates and ranges ("2024-01-05", "1/4")
    STRING = "string"


@dataclass
class Dataset:
    """A platform-labeled sequence of records loaded from one file."""
    platform: str
    records: List[Record] = field(default_factory=list)
    path: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.records)


@dataclass
class GenreCount:
    """Number of records carrying one genre value."""
    genre: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"genre": self.genre, "count": self.count}


@dataclass
class ArtistOverlap:
    """An artist found on more than one platform."""
    artist: str
    platforms: List[str] = field(default_factory=list)

    @property
    def platform_count(self) -> int:
        return len(self.platforms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "artist": self.artist,
            "platforms": list(self.platforms),
            "platformCount": self.platform_count,
        }


@dataclass
class LoadResult:
    """Outcome of loading one chart file in a multi-file load."""
    platform: str
    path: str
    records: List[Record] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def count(self) -> int:
        return len(self.records)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "platform": self.platform,
            "data": self.records,
            "count": self.count,
        }
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass
class ValidationReport:
    """Structural validation of an uploaded chart file."""
    is_valid: bool
    row_count: int
    column_count: int
    available_columns: List[str] = field(default_factory=list)
    missing_columns: List[str] = field(default_factory=list)
    data_types: Dict[str, str] = field(default_factory=dict)
    preview: List[Record] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "availableColumns": self.available_columns,
            "missingColumns": self.missing_columns,
            "dataTypes": self.data_types,
            "preview": self.preview,
        }


@dataclass
class UploadAnalysis:
    """Summary of one uploaded chart file."""
    filename: str
    uploaded_as: str
    size: int
    records: List[Record] = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    genre_distribution: List[GenreCount] = field(default_factory=list)
    preview: List[Record] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.records)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "file": {
                "filename": self.filename,
                "uploadedAs": self.uploaded_as,
                "size": self.size,
                "rowCount": self.row_count,
                "columns": self.columns,
                "genreDistribution": [g.to_dict() for g in self.genre_distribution],
                "preview": self.preview,
            },
            "data": self.records,
        }
