"""
Page fetchers: headless Chromium rendering with a plain HTTP fallback.
"""

from __future__ import annotations

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp
import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from folioscrape.config.config import FetcherConfig
from folioscrape.exceptions import FetchError
from folioscrape.extractor.document import parse_html
from folioscrape.extractor.protocols import Document
from folioscrape.observability.metrics import METRICS

logger = structlog.get_logger(__name__)


class BrowserUnavailableError(FetchError):
    """Chromium could not be started at all."""


@dataclass
class FetchedPage:
    """Rendered HTML together with how and when it was obtained."""

    url: str
    html: str
    method: str
    start_ts: float
    end_ts: float

    @property
    def elapsed(self) -> float:
        return self.end_ts - self.start_ts


class HttpFetcher:
    """Plain HTTP GET with retries on rate limiting and gateway errors."""

    method = "http"
    RETRY_STATUSES = frozenset({429, 502, 503, 504})

    def __init__(self, config: FetcherConfig) -> None:
        self.config = config
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self) -> None:
        """Initialize the HTTP client session."""
        if self.session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout, headers={"User-Agent": self.config.user_agent})

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "HttpFetcher":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with ±20% jitter."""
        return self.config.retry_backoff * 2 ** (attempt - 1) * random.uniform(0.8, 1.2)

    async def fetch_html(self, url: str) -> str:
        """
        Fetch ``url`` and return the decoded body.

        Raises:
            FetchError: on network failure, timeout or a non-success status
        """
        if self.session is None:
            raise RuntimeError("HTTP fetcher not initialized. Call initialize() first.")

        max_retries = self.config.max_retries
        last_error: FetchError | None = None

        for attempt in range(1, max_retries + 2):
            try:
                async with self.session.get(url) as response:
                    if response.status in self.RETRY_STATUSES:
                        last_error = FetchError(
                            f"HTTP {response.status}: {response.reason}", url=url, status=response.status
                        )
                    elif response.status >= 400:
                        raise FetchError(f"HTTP {response.status}: {response.reason}", url=url, status=response.status)
                    else:
                        return await response.text(errors="replace")
            except asyncio.TimeoutError as e:
                last_error = FetchError(f"Request timed out after {self.config.timeout}s", url=url)
                last_error.__cause__ = e
            except aiohttp.ClientError as e:
                last_error = FetchError(f"Request failed: {e}", url=url)
                last_error.__cause__ = e

            if attempt <= max_retries:
                logger.info(
                    "Retrying request",
                    url=url,
                    attempt=attempt,
                    max_retries=max_retries,
                    error=str(last_error),
                )
                await asyncio.sleep(self._backoff_delay(attempt))

        assert last_error is not None
        raise last_error


class BrowserFetcher:
    """Renders a page in headless Chromium and returns the final DOM."""

    method = "browser"

    def __init__(self, config: FetcherConfig) -> None:
        self.config = config

    def _launch_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"headless": True, "args": list(self.config.browser_args)}
        if self.config.chromium_executable_path:
            options["executable_path"] = self.config.chromium_executable_path
        return options

    async def fetch_html(self, url: str) -> str:
        """
        Navigate to ``url`` and return ``page.content()``.

        Raises:
            BrowserUnavailableError: if Playwright or Chromium cannot start
            FetchError: on navigation failure, timeout or a non-success status
        """
        try:
            playwright = await async_playwright().start()
        except PlaywrightError as e:
            raise BrowserUnavailableError(f"Could not start Playwright: {e}", url=url) from e

        try:
            try:
                browser = await playwright.chromium.launch(**self._launch_options())
            except PlaywrightError as e:
                raise BrowserUnavailableError(f"Could not launch Chromium: {e}", url=url) from e

            try:
                page = await browser.new_page()
                response = await page.goto(
                    url,
                    wait_until=self.config.wait_until,
                    timeout=self.config.timeout * 1000,
                )
                if response is not None and response.status >= 400:
                    raise FetchError(
                        f"HTTP {response.status}: {response.status_text}", url=url, status=response.status
                    )
                return await page.content()
            except PlaywrightTimeoutError as e:
                raise FetchError(f"Timed out rendering page after {self.config.timeout}s", url=url) from e
            except PlaywrightError as e:
                raise FetchError(f"Failed to render page: {e}", url=url) from e
            finally:
                await browser.close()
        finally:
            await playwright.stop()


class PageFetcher:
    """Chooses between browser rendering and plain HTTP per configuration."""

    def __init__(self, config: Optional[FetcherConfig] = None) -> None:
        self.config = config or FetcherConfig()

    async def _fetch_over_http(self, url: str) -> str:
        async with HttpFetcher(self.config) as fetcher:
            return await fetcher.fetch_html(url)

    async def fetch(self, url: str) -> FetchedPage:
        """Fetch the rendered HTML of ``url``."""
        start_time = time.time()
        method = HttpFetcher.method

        if self.config.render_javascript:
            logger.info("Rendering page with headless browser", url=url)
            try:
                html = await BrowserFetcher(self.config).fetch_html(url)
                method = BrowserFetcher.method
            except BrowserUnavailableError as e:
                if not self.config.fallback_to_http:
                    raise
                logger.warning("Browser unavailable, falling back to HTTP fetch", url=url, error=str(e))
                html = await self._fetch_over_http(url)
        else:
            logger.info("Fetching page over HTTP", url=url)
            html = await self._fetch_over_http(url)

        end_time = time.time()
        METRICS["fetch_duration_seconds"].labels(method=method).observe(end_time - start_time)
        logger.info("Page fetched", url=url, method=method, bytes=len(html), elapsed=round(end_time - start_time, 3))

        return FetchedPage(url=url, html=html, method=method, start_ts=start_time, end_ts=end_time)


async def fetch_rendered_html(url: str, config: Optional[FetcherConfig] = None) -> Document:
    """Fetch ``url`` and return it as a parsed document."""
    page = await PageFetcher(config).fetch(url)
    return parse_html(page.html)
