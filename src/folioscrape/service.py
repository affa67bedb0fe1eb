"""
Fetch-then-extract orchestration for a single portfolio URL.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Optional
from urllib.parse import urlparse

import structlog

from folioscrape.config.config import Config
from folioscrape.crawler.fetcher import PageFetcher
from folioscrape.exceptions import FetchError, ValidationError
from folioscrape.extractor.engine import extract_portfolio_html
from folioscrape.extractor.models import ExtractionRecord
from folioscrape.observability.metrics import METRICS

logger = structlog.get_logger(__name__)

ALLOWED_SCHEMES = ("http", "https")


def validate_url(url: Any) -> str:
    """
    Check that ``url`` is present and parses as an absolute http(s) URL.

    Raises:
        ValidationError: if the URL is missing or malformed
    """
    if url is None or (isinstance(url, str) and not url.strip()):
        raise ValidationError("URL is required")
    if not isinstance(url, str):
        raise ValidationError("Invalid URL format")

    candidate = url.strip()
    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
    except ValueError as e:
        raise ValidationError("Invalid URL format") from e

    if parsed.scheme not in ALLOWED_SCHEMES or not hostname:
        raise ValidationError("Invalid URL format")
    if any(ch.isspace() for ch in parsed.netloc):
        raise ValidationError("Invalid URL format")
    return candidate


class PortfolioScraper:
    """Validates a URL, fetches the page and runs the extraction engine on it."""

    def __init__(self, config: Optional[Config] = None, fetcher: Optional[PageFetcher] = None) -> None:
        self.config = config or Config()
        self.fetcher = fetcher or PageFetcher(self.config.fetcher)

    async def scrape(self, url: Any) -> ExtractionRecord:
        """
        Scrape one portfolio page.

        Raises:
            ValidationError: the URL is missing or malformed
            FetchError: the page could not be fetched or rendered
        """
        try:
            source_url = validate_url(url)
        except ValidationError:
            METRICS["scrapes"].labels(outcome="invalid").inc()
            raise

        log = logger.bind(url=source_url)
        log.info("Scraping portfolio")

        try:
            page = await self.fetcher.fetch(source_url)
        except FetchError as e:
            METRICS["scrapes"].labels(outcome="fetch_error").inc()
            log.error("Failed to fetch portfolio", error=str(e), status=e.status)
            raise

        # Parsing is CPU bound; keep it off the event loop.
        start_time = time.time()
        loop = asyncio.get_running_loop()
        record = await loop.run_in_executor(None, extract_portfolio_html, page.html, source_url)
        extraction_time = time.time() - start_time

        METRICS["extraction_duration_seconds"].observe(extraction_time)
        METRICS["scrapes"].labels(outcome="success").inc()
        log.info(
            "Portfolio scraped",
            candidate_name=record.candidate_name,
            images=len(record.image_urls),
            resume_links=len(record.resume_links),
            projects=len(record.project_summaries),
            fetch_method=page.method,
            extraction_time=round(extraction_time, 3),
        )
        return record
