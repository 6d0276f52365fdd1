"""
ChartScope - Music Chart CSV Analysis

Loads Billboard, TikTok, Spotify and collaboration chart exports and
answers genre, cross-platform and search queries over them.
"""

__version__ = "1.0.0"
__author__ = "ChartScope Team"

from chartscope.config import ChartScopeConfig
from chartscope.service import ChartAnalyzer

__all__ = ["ChartScopeConfig", "ChartAnalyzer", "__version__"]
