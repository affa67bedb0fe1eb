"""
URL normalisation helpers shared by the link and image passes.
"""

from __future__ import annotations

from typing import Iterable, List
from urllib.parse import urljoin, urlsplit

# Substrings that mark decorative or tracking images. Matching is blunt:
# "logo-design.png" is excluded as well.
EXCLUDED_IMAGE_MARKERS = ("favicon", "icon", "logo", "pixel", "tracking")
WEB_SCHEMES = ("http", "https")


def resolve_url(href: str, base_url: str) -> str:
    """Resolve ``href`` against ``base_url``.

    Root-relative paths get the base URL's scheme and host prefixed,
    anything already starting with ``http`` is returned unchanged, and the
    rest goes through standard relative resolution.
    """
    if href.startswith("//"):
        # protocol-relative reference: keeps its own host
        return urljoin(base_url, href)
    if href.startswith("/"):
        base = urlsplit(base_url)
        return f"{base.scheme}://{base.netloc}{href}"
    if href.startswith("http"):
        return href
    return urljoin(base_url, href)


def is_web_url(url: str) -> bool:
    """True for absolute http(s) URLs with a host; mailto:, data: and the like are not."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in WEB_SCHEMES and bool(parts.netloc)


def is_excluded_image(url: str) -> bool:
    return any(marker in url for marker in EXCLUDED_IMAGE_MARKERS)


def dedupe(urls: Iterable[str]) -> List[str]:
    """Drop repeated values, keeping first-seen order."""
    return list(dict.fromkeys(urls))
