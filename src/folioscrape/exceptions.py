"""
Exception hierarchy for folioscrape.

The extraction engine itself never raises; these errors belong to the
boundary collaborators (URL validation and page fetching).
"""

from __future__ import annotations


class FolioScrapeError(Exception):
    """Base class for all folioscrape errors."""


class ValidationError(FolioScrapeError):
    """Raised when a submitted URL is missing or malformed."""


class FetchError(FolioScrapeError):
    """Raised when a page cannot be fetched or rendered."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
