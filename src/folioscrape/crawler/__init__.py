"""Page fetching: headless browser rendering with an HTTP fallback."""

from .fetcher import BrowserFetcher, BrowserUnavailableError, FetchedPage, HttpFetcher, PageFetcher, fetch_rendered_html

__all__ = [
    "BrowserFetcher",
    "BrowserUnavailableError",
    "FetchedPage",
    "HttpFetcher",
    "PageFetcher",
    "fetch_rendered_html",
]
