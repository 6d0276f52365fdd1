"""
Error types

Exceptions raised by the chart loaders and analyzers. Rows that fail
validation are dropped silently and never raise.
"""

from typing import Optional


class ChartScopeError(Exception):
    """Base class for all ChartScope errors."""
    pass


class DatasetNotFoundError(ChartScopeError, FileNotFoundError):
    """Raised when a chart file does not exist."""

    def __init__(self, path: str):
        self.path = str(path)
        super().__init__(f"File not found: {self.path}")


class CSVParseError(ChartScopeError):
    """Raised when the CSV tokenizer rejects a file."""

    def __init__(self, path: str, message: str, line_num: Optional[int] = None):
        self.path = str(path)
        self.line_num = line_num
        location = f" (line {line_num})" if line_num else ""
        super().__init__(f"Malformed CSV in {self.path}{location}: {message}")


class InvalidRequestError(ChartScopeError, ValueError):
    """Raised when a caller omits or misuses a required parameter."""
    pass
