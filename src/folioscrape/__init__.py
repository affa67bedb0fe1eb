"""
folioscrape - heuristic profile extraction from portfolio web pages.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .exceptions import FetchError, FolioScrapeError, ValidationError
from .extractor import ExtractionRecord, extract_portfolio, extract_portfolio_html
from .service import PortfolioScraper

__all__ = [
    "__version__",
    "Config",
    "ExtractionRecord",
    "FetchError",
    "FolioScrapeError",
    "PortfolioScraper",
    "ValidationError",
    "extract_portfolio",
    "extract_portfolio_html",
]
