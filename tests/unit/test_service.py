"""
Tests for URL validation and the fetch-then-extract service.
"""

import time
from unittest.mock import AsyncMock

import pytest
from folioscrape.crawler.fetcher import FetchedPage
from folioscrape.exceptions import FetchError, ValidationError
from folioscrape.observability.metrics import METRICS
from folioscrape.service import PortfolioScraper, validate_url

from tests.helpers.metric_delta import histogram_observes, metric_delta


def _page(url, html, method="browser"):
    now = time.time()
    return FetchedPage(url=url, html=html, method=method, start_ts=now, end_ts=now)


@pytest.mark.unit
class TestValidateUrl:
    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_missing(self, url):
        with pytest.raises(ValidationError, match="URL is required"):
            validate_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "janedoe.dev",
            "ftp://janedoe.dev/cv.pdf",
            "javascript:alert(1)",
            "https://",
            "http://[::1",
            "https://exa mple.com",
            "https://:8080/",
        ],
    )
    def test_malformed(self, url):
        with pytest.raises(ValidationError, match="Invalid URL format"):
            validate_url(url)

    @pytest.mark.parametrize("url", [123, 4.5, ["https://janedoe.dev"], {"href": "https://janedoe.dev"}, True])
    def test_non_string(self, url):
        with pytest.raises(ValidationError, match="Invalid URL format"):
            validate_url(url)

    @pytest.mark.parametrize(
        "url",
        ["https://janedoe.dev", "http://localhost:8080/me/", "https://a.example/p?x=1#top"],
    )
    def test_valid(self, url):
        assert validate_url(url) == url

    def test_strips_whitespace(self):
        assert validate_url("  https://janedoe.dev/  ") == "https://janedoe.dev/"


@pytest.mark.unit
class TestPortfolioScraper:
    """Test cases for PortfolioScraper.scrape."""

    @pytest.mark.asyncio
    async def test_scrape_success(self, config, portfolio_html, base_url):
        fetcher = AsyncMock()
        fetcher.fetch.return_value = _page(base_url, portfolio_html)
        scraper = PortfolioScraper(config, fetcher=fetcher)

        with metric_delta(METRICS["scrapes"], outcome="success"), histogram_observes(
            METRICS["extraction_duration_seconds"]
        ):
            record = await scraper.scrape(base_url)

        fetcher.fetch.assert_awaited_once_with(base_url)
        assert record.candidate_name == "Jane Doe"
        assert record.source_url == base_url
        assert len(record.project_summaries) == 3

    @pytest.mark.asyncio
    async def test_invalid_url_never_fetches(self, config):
        fetcher = AsyncMock()
        scraper = PortfolioScraper(config, fetcher=fetcher)

        with metric_delta(METRICS["scrapes"], outcome="invalid"):
            with pytest.raises(ValidationError):
                await scraper.scrape("ftp://nope")

        fetcher.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_url(self, config):
        scraper = PortfolioScraper(config, fetcher=AsyncMock())
        with pytest.raises(ValidationError, match="URL is required"):
            await scraper.scrape(None)

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self, config):
        fetcher = AsyncMock()
        fetcher.fetch.side_effect = FetchError("HTTP 404: Not Found", url="https://x.example/", status=404)
        scraper = PortfolioScraper(config, fetcher=fetcher)

        with metric_delta(METRICS["scrapes"], outcome="fetch_error"):
            with pytest.raises(FetchError) as exc_info:
                await scraper.scrape("https://x.example/")

        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_unparseable_page_still_yields_record(self, config):
        fetcher = AsyncMock()
        fetcher.fetch.return_value = _page("https://x.example/", "")
        record = await PortfolioScraper(config, fetcher=fetcher).scrape("https://x.example/")

        assert record.candidate_name == "Unknown"
        assert record.candidate_bio == "No bio available"
        assert record.image_urls == []

    def test_default_fetcher_uses_config(self, config):
        scraper = PortfolioScraper(config)
        assert scraper.fetcher.config is config.fetcher
