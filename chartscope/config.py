"""
Configuration management for ChartScope.

Handles the chart file catalog, analysis defaults, upload limits and
web server settings.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import os
import tempfile
from pathlib import Path
import yaml


@dataclass
class ChartSource:
    """A chart CSV file and the platform it came from."""
    file: str
    platform: str


def _default_charts() -> List[ChartSource]:
    return [
        ChartSource("billboard_2024_analysis.csv", "Billboard"),
        ChartSource("tiktok_viral_2024.csv", "TikTok"),
        ChartSource("spotify_top_2024.csv", "Spotify"),
        ChartSource("cross_genre_collaborations_2024.csv", "Collaborations"),
    ]


def _default_platforms() -> List[str]:
    return ["Billboard", "TikTok", "Spotify"]


@dataclass
class DataConfig:
    """Where the bundled chart files live and which analyses use them."""
    data_dir: Optional[str] = None
    charts: List[ChartSource] = field(default_factory=_default_charts)
    cross_platform_platforms: List[str] = field(default_factory=_default_platforms)
    search_platforms: List[str] = field(default_factory=_default_platforms)
    genre_platform: str = "Billboard"
    genre_field: str = "Primary_Genre"

    def __post_init__(self):
        if not self.data_dir:
            self.data_dir = os.environ.get("CHARTSCOPE_DATA_DIR", "./data")

    def chart_path(self, chart: ChartSource) -> str:
        """Absolute-or-relative path of a chart file inside data_dir."""
        return str(Path(self.data_dir) / chart.file)

    def find_chart(self, platform: str) -> Optional[ChartSource]:
        """Look up a configured chart by platform label, ignoring case."""
        wanted = platform.lower()
        for chart in self.charts:
            if chart.platform.lower() == wanted:
                return chart
        return None

    def sources_for(self, platforms: List[str]) -> List[tuple]:
        """(platform, path) pairs for the given platform labels, in catalog order."""
        wanted = {p.lower() for p in platforms}
        return [
            (chart.platform, self.chart_path(chart))
            for chart in self.charts
            if chart.platform.lower() in wanted
        ]

    def all_sources(self) -> List[tuple]:
        return [(chart.platform, self.chart_path(chart)) for chart in self.charts]


@dataclass
class AnalysisConfig:
    """Analysis defaults."""
    default_genre_field: str = "genre"
    required_columns: List[str] = field(default_factory=lambda: ["title", "artist", "genre"])
    upload_preview_rows: int = 5
    validation_preview_rows: int = 3


@dataclass
class WebConfig:
    """HTTP API settings."""
    host: str = "127.0.0.1"
    port: Optional[int] = None
    client_url: Optional[str] = None
    upload_dir: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # Per uploaded file
    max_files: int = 5
    allowed_extensions: List[str] = field(default_factory=lambda: ["csv"])

    def __post_init__(self):
        if self.port is None:
            self.port = int(os.environ.get("PORT", 5000))
        if not self.client_url:
            self.client_url = os.environ.get("CLIENT_URL", "http://localhost:3000")
        if not self.upload_dir:
            self.upload_dir = os.path.join(tempfile.gettempdir(), "chartscope_uploads")


@dataclass
class ChartScopeConfig:
    """Main configuration container."""
    data: DataConfig = field(default_factory=DataConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    web: WebConfig = field(default_factory=WebConfig)

    # Processing options
    parallel_workers: int = 4
    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: str) -> "ChartScopeConfig":
        """Load configuration from YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "ChartScopeConfig":
        """Create config from dictionary."""
        data_section = data.get("data", {}) or {}
        charts = data_section.get("charts")
        data_config = DataConfig(
            data_dir=data_section.get("data_dir"),
            charts=(
                [ChartSource(file=c["file"], platform=c["platform"]) for c in charts]
                if charts else _default_charts()
            ),
            cross_platform_platforms=data_section.get("cross_platform_platforms") or _default_platforms(),
            search_platforms=data_section.get("search_platforms") or _default_platforms(),
            genre_platform=data_section.get("genre_platform", "Billboard"),
            genre_field=data_section.get("genre_field", "Primary_Genre"),
        )

        analysis_data = data.get("analysis", {}) or {}
        analysis_config = AnalysisConfig(
            default_genre_field=analysis_data.get("default_genre_field", "genre"),
            required_columns=analysis_data.get("required_columns") or ["title", "artist", "genre"],
            upload_preview_rows=analysis_data.get("upload_preview_rows", 5),
            validation_preview_rows=analysis_data.get("validation_preview_rows", 3),
        )

        web_data = data.get("web", {}) or {}
        web_config = WebConfig(
            host=web_data.get("host", "127.0.0.1"),
            port=web_data.get("port"),
            client_url=web_data.get("client_url"),
            upload_dir=web_data.get("upload_dir"),
            max_file_size=web_data.get("max_file_size", 10 * 1024 * 1024),
            max_files=web_data.get("max_files", 5),
        )

        return cls(
            data=data_config,
            analysis=analysis_config,
            web=web_config,
            parallel_workers=data.get("parallel_workers", 4),
            verbose=data.get("verbose", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "data": {
                "data_dir": self.data.data_dir,
                "charts": [{"file": c.file, "platform": c.platform} for c in self.data.charts],
                "cross_platform_platforms": self.data.cross_platform_platforms,
                "search_platforms": self.data.search_platforms,
                "genre_platform": self.data.genre_platform,
                "genre_field": self.data.genre_field,
            },
            "analysis": {
                "default_genre_field": self.analysis.default_genre_field,
                "required_columns": self.analysis.required_columns,
                "upload_preview_rows": self.analysis.upload_preview_rows,
                "validation_preview_rows": self.analysis.validation_preview_rows,
            },
            "web": {
                "host": self.web.host,
                "port": self.web.port,
                "client_url": self.web.client_url,
                "max_file_size": self.web.max_file_size,
                "max_files": self.web.max_files,
            },
            "parallel_workers": self.parallel_workers,
            "verbose": self.verbose,
        }


def create_default_config(
    data_dir: Optional[str] = None,
    upload_dir: Optional[str] = None,
    verbose: bool = False,
) -> ChartScopeConfig:
    """Factory function to create a default configuration."""
    return ChartScopeConfig(
        data=DataConfig(data_dir=data_dir),
        analysis=AnalysisConfig(),
        web=WebConfig(upload_dir=upload_dir),
        verbose=verbose,
    )
