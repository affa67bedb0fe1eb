"""
Tests for the page fetchers.

HTTP behaviour is exercised against aioresponses; the browser path is
replaced with mocks so no Chromium binary is needed.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest
from aioresponses import aioresponses
from folioscrape.crawler.fetcher import (
    BrowserFetcher,
    BrowserUnavailableError,
    FetchedPage,
    HttpFetcher,
    PageFetcher,
    fetch_rendered_html,
)
from folioscrape.exceptions import FetchError
from folioscrape.extractor.protocols import Document
from folioscrape.observability.metrics import METRICS

from tests.helpers.metric_delta import histogram_observes

URL = "https://janedoe.dev/"
PAGE = "<html><body><h1>Jane Doe</h1></body></html>"


@pytest.mark.unit
class TestHttpFetcher:
    """Test cases for HttpFetcher."""

    @pytest.mark.asyncio
    async def test_success(self, fetcher_config):
        with aioresponses() as m:
            m.get(URL, status=200, body=PAGE, headers={"Content-Type": "text/html"})
            async with HttpFetcher(fetcher_config) as fetcher:
                assert await fetcher.fetch_html(URL) == PAGE

    @pytest.mark.asyncio
    async def test_client_error_status_not_retried(self, fetcher_config):
        with aioresponses() as m:
            m.get(URL, status=404, body="missing")
            async with HttpFetcher(fetcher_config) as fetcher:
                with pytest.raises(FetchError) as exc_info:
                    await fetcher.fetch_html(URL)

        assert exc_info.value.status == 404
        assert exc_info.value.url == URL
        assert "HTTP 404" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_retry_on_503_then_success(self, fetcher_config):
        with aioresponses() as m:
            m.get(URL, status=503, body="")
            m.get(URL, status=200, body=PAGE)
            async with HttpFetcher(fetcher_config) as fetcher:
                assert await fetcher.fetch_html(URL) == PAGE

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, fetcher_config):
        with aioresponses() as m:
            m.get(URL, status=429, repeat=True)
            async with HttpFetcher(fetcher_config) as fetcher:
                with pytest.raises(FetchError) as exc_info:
                    await fetcher.fetch_html(URL)

        assert exc_info.value.status == 429

    @pytest.mark.asyncio
    async def test_timeout_becomes_fetch_error(self, fetcher_config):
        with aioresponses() as m:
            m.get(URL, exception=asyncio.TimeoutError(), repeat=True)
            async with HttpFetcher(fetcher_config) as fetcher:
                with pytest.raises(FetchError, match="timed out"):
                    await fetcher.fetch_html(URL)

    @pytest.mark.asyncio
    async def test_connection_error_then_success(self, fetcher_config):
        with aioresponses() as m:
            m.get(URL, exception=aiohttp.ClientConnectionError("refused"))
            m.get(URL, status=200, body=PAGE)
            async with HttpFetcher(fetcher_config) as fetcher:
                assert await fetcher.fetch_html(URL) == PAGE

    @pytest.mark.asyncio
    async def test_requires_initialize(self, fetcher_config):
        with pytest.raises(RuntimeError):
            await HttpFetcher(fetcher_config).fetch_html(URL)

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, fetcher_config):
        fetcher = HttpFetcher(fetcher_config)
        await fetcher.initialize()
        await fetcher.close()
        await fetcher.close()
        assert fetcher.session is None

    def test_backoff_grows_exponentially(self, fetcher_config):
        fetcher = HttpFetcher(fetcher_config.model_copy(update={"retry_backoff": 1.0}))
        with patch("folioscrape.crawler.fetcher.random.uniform", return_value=1.0):
            assert [fetcher._backoff_delay(n) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]


@pytest.mark.unit
class TestBrowserFetcher:
    def test_launch_options(self, fetcher_config):
        config = fetcher_config.model_copy(update={"chromium_executable_path": "/opt/chromium"})
        options = BrowserFetcher(config)._launch_options()
        assert options["headless"] is True
        assert "--no-sandbox" in options["args"]
        assert options["executable_path"] == "/opt/chromium"

    def test_launch_options_without_custom_binary(self, fetcher_config):
        assert "executable_path" not in BrowserFetcher(fetcher_config)._launch_options()


@pytest.mark.unit
class TestPageFetcher:
    """Test cases for PageFetcher method selection."""

    @pytest.mark.asyncio
    async def test_http_when_rendering_disabled(self, fetcher_config):
        with aioresponses() as m, histogram_observes(METRICS["fetch_duration_seconds"], method="http"):
            m.get(URL, status=200, body=PAGE)
            page = await PageFetcher(fetcher_config).fetch(URL)

        assert isinstance(page, FetchedPage)
        assert page.html == PAGE
        assert page.method == "http"
        assert page.elapsed >= 0

    @pytest.mark.asyncio
    async def test_browser_used_when_rendering_enabled(self, fetcher_config):
        config = fetcher_config.model_copy(update={"render_javascript": True})
        with patch.object(BrowserFetcher, "fetch_html", new=AsyncMock(return_value=PAGE)) as browser:
            page = await PageFetcher(config).fetch(URL)

        browser.assert_awaited_once_with(URL)
        assert page.method == "browser"

    @pytest.mark.asyncio
    async def test_falls_back_to_http_when_browser_unavailable(self, fetcher_config):
        config = fetcher_config.model_copy(update={"render_javascript": True, "fallback_to_http": True})
        failing = AsyncMock(side_effect=BrowserUnavailableError("no chromium", url=URL))
        with patch.object(BrowserFetcher, "fetch_html", new=failing), aioresponses() as m:
            m.get(URL, status=200, body=PAGE)
            page = await PageFetcher(config).fetch(URL)

        assert page.method == "http"
        assert page.html == PAGE

    @pytest.mark.asyncio
    async def test_no_fallback_when_disabled(self, fetcher_config):
        config = fetcher_config.model_copy(update={"render_javascript": True, "fallback_to_http": False})
        failing = AsyncMock(side_effect=BrowserUnavailableError("no chromium", url=URL))
        with patch.object(BrowserFetcher, "fetch_html", new=failing):
            with pytest.raises(BrowserUnavailableError):
                await PageFetcher(config).fetch(URL)

    @pytest.mark.asyncio
    async def test_navigation_errors_are_not_masked(self, fetcher_config):
        """Only an unavailable browser triggers the fallback."""
        config = fetcher_config.model_copy(update={"render_javascript": True})
        failing = AsyncMock(side_effect=FetchError("HTTP 500: Server Error", url=URL, status=500))
        with patch.object(BrowserFetcher, "fetch_html", new=failing):
            with pytest.raises(FetchError) as exc_info:
                await PageFetcher(config).fetch(URL)

        assert not isinstance(exc_info.value, BrowserUnavailableError)
        assert exc_info.value.status == 500

    @pytest.mark.asyncio
    async def test_fetch_rendered_html_returns_document(self, fetcher_config):
        with aioresponses() as m:
            m.get(URL, status=200, body=PAGE)
            doc = await fetch_rendered_html(URL, fetcher_config)

        assert isinstance(doc, Document)
        assert doc.select("h1")[0].text() == "Jane Doe"
