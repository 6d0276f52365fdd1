"""
Chart Service

Orchestrates the loaders and analyzers for the web API and the CLI:
resolves configured chart files, aggregates partial failures, and shapes
upload analysis and validation results.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Sequence
from datetime import datetime
from pathlib import Path
import logging
import os

from chartscope.config import ChartScopeConfig
from chartscope.core.chart_store import (
    Record,
    ArtistOverlap,
    GenreCount,
    LoadResult,
    UploadAnalysis,
    ValidationReport,
)
from chartscope.core.csv_loader import load_dataset, load_datasets
from chartscope.core.cross_platform import cross_platform_artists
from chartscope.core.errors import ChartScopeError, InvalidRequestError
from chartscope.core.genre_analyzer import genre_distribution
from chartscope.core.search import search_records
from chartscope.core.type_sniffer import validate_structure

logger = logging.getLogger(__name__)


@dataclass
class ChartsOverview:
    """Every configured chart, loaded side by side."""
    results: List[LoadResult] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def total_songs(self) -> int:
        return sum(r.count for r in self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "data": [r.to_dict() for r in self.results],
            "totalSongs": self.total_songs,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class GenreReport:
    """Genre distribution of one chart."""
    platform: str
    genre_field: str
    distribution: List[GenreCount] = field(default_factory=list)
    total_songs: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "data": [g.to_dict() for g in self.distribution],
            "totalSongs": self.total_songs,
        }


@dataclass
class SearchResult:
    """Records matching a search, with the parameters that produced them."""
    query: str
    platform: Optional[str] = None
    genre: Optional[str] = None
    records: List[Record] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "data": self.records,
            "totalResults": len(self.records),
            "query": {"query": self.query, "platform": self.platform, "genre": self.genre},
        }


@dataclass
class UploadedFile:
    """A chart file saved by the upload layer."""
    path: str
    filename: str
    uploaded_as: Optional[str] = None
    size: Optional[int] = None


class ChartAnalyzer:
    """
    Entry point for chart analyses.

    This class handles:
    - Loading the bundled chart catalog with per-file failure isolation
    - Genre distribution of the genre chart
    - Cross-platform artist detection
    - Platform/genre filtered search
    - Upload analysis and structural validation
    """

    def __init__(self, config: ChartScopeConfig):
        """
        Initialize the chart analyzer.

        Args:
            config: ChartScope configuration
        """
        self.config = config
        self.data_config = config.data

    def all_charts(self) -> ChartsOverview:
        """Load every configured chart; failed files come back empty with an error."""
        results = load_datasets(self.data_config.all_sources(), self.config.parallel_workers)
        overview = ChartsOverview(results=results)
        logger.info(f"Loaded {len(results)} charts, {overview.total_songs} songs")
        return overview

    def genre_analysis(self) -> GenreReport:
        """
        Genre distribution of the configured genre chart.

        Raises:
            InvalidRequestError: If the genre platform is not in the catalog
            DatasetNotFoundError, CSVParseError: If the chart cannot be loaded
        """
        platform = self.data_config.genre_platform
        chart = self.data_config.find_chart(platform)
        if chart is None:
            raise InvalidRequestError(f"No chart configured for platform {platform}")

        records = load_dataset(self.data_config.chart_path(chart))
        field_name = self.data_config.genre_field
        return GenreReport(
            platform=chart.platform,
            genre_field=field_name,
            distribution=genre_distribution(records, field_name),
            total_songs=len(records),
        )

    def cross_platform(self) -> List[ArtistOverlap]:
        """
        Artists charting on more than one of the cross-platform charts.

        Any chart that fails to load fails the whole analysis, since a
        missing platform would silently shrink every overlap.
        """
        sources = self.data_config.sources_for(self.data_config.cross_platform_platforms)
        datasets = [(platform, load_dataset(path)) for platform, path in sources]
        return cross_platform_artists(datasets)

    def _search_sources(self, platform: Optional[str]) -> List[tuple]:
        if not platform:
            return self.data_config.sources_for(self.data_config.search_platforms)

        if any(c in platform for c in "/\\*?[]") or ".." in platform:
            raise InvalidRequestError(f"Invalid platform name: {platform}")

        chart = self.data_config.find_chart(platform)
        if chart is not None:
            return [(chart.platform, self.data_config.chart_path(chart))]

        # Unlisted platform: pick up any <platform>_*.csv dropped into data_dir
        matches = sorted(Path(self.data_config.data_dir).glob(f"{platform.lower()}_*.csv"))
        if not matches:
            logger.warning(f"No chart files found for platform {platform}")
        return [(platform, str(path)) for path in matches]

    def search(
        self,
        query: str,
        platform: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> SearchResult:
        """
        Search the chart catalog.

        Args:
            query: Text to look for (required)
            platform: Restrict the search to one platform's chart files
            genre: Genre substring filter

        Returns:
            Search result; records carry a "platform" key

        Raises:
            InvalidRequestError: If query is empty or platform is malformed
        """
        if not query:
            raise InvalidRequestError("Search query is required")

        tagged: List[Record] = []
        for result in load_datasets(self._search_sources(platform), self.config.parallel_workers):
            if not result.ok:
                continue
            tagged.extend({**record, "platform": result.platform} for record in result.records)

        records = search_records(tagged, query, genre)
        logger.info(f"Search '{query}' returned {len(records)} results")
        return SearchResult(query=query, platform=platform, genre=genre, records=records)

    def analyze_upload(self, upload: UploadedFile) -> UploadAnalysis:
        """
        Summarize one uploaded chart file.

        Raises:
            DatasetNotFoundError, CSVParseError: If the file cannot be loaded
        """
        records = load_dataset(upload.path)
        size = upload.size if upload.size is not None else os.path.getsize(upload.path)
        return UploadAnalysis(
            filename=upload.filename,
            uploaded_as=upload.uploaded_as or Path(upload.path).name,
            size=size,
            records=records,
            columns=list(records[0].keys()) if records else [],
            genre_distribution=genre_distribution(records, self.config.analysis.default_genre_field),
            preview=records[:self.config.analysis.upload_preview_rows],
        )

    def analyze_uploads(self, uploads: Sequence[UploadedFile]) -> List[Dict[str, Any]]:
        """Analyze several uploads; a broken file is reported without stopping the rest."""
        if not uploads:
            raise InvalidRequestError("No CSV files uploaded")

        results: List[Dict[str, Any]] = []
        for upload in uploads:
            try:
                results.append(self.analyze_upload(upload).to_dict())
            except ChartScopeError as e:
                logger.warning(f"Failed to parse upload {upload.filename}: {e}")
                results.append({
                    "success": False,
                    "filename": upload.filename,
                    "error": f"Failed to parse CSV: {e}",
                })
        return results

    def validate_upload(self, path: str, remove: bool = True) -> ValidationReport:
        """
        Check an uploaded file for the columns chart analysis needs.

        Args:
            path: Uploaded file
            remove: Delete the file once it has been read

        Returns:
            Validation report
        """
        try:
            records = load_dataset(path)
        finally:
            if remove and os.path.exists(path):
                os.remove(path)

        return validate_structure(
            records,
            required_columns=self.config.analysis.required_columns,
            preview_rows=self.config.analysis.validation_preview_rows,
        )
