"""
Image URL and resume link collectors.
"""

from __future__ import annotations

from typing import List

from .models import ResumeLink
from .protocols import Document
from .urls import dedupe, is_excluded_image, is_web_url, resolve_url

RESUME_KEYWORDS = ("resume", "cv")


def extract_images(doc: Document, base_url: str) -> List[str]:
    """Collect absolute image URLs, skipping icons, logos and trackers."""
    collected: List[str] = []
    for image in doc.select("img"):
        src = image.attr("src")
        if not src:
            continue
        url = resolve_url(src, base_url)
        if not is_web_url(url) or is_excluded_image(url):
            continue
        collected.append(url)
    return dedupe(collected)


def extract_resume_links(doc: Document, base_url: str) -> List[ResumeLink]:
    """Collect PDF links and links labelled as a resume or CV, in document order."""
    links: List[ResumeLink] = []
    for anchor in doc.select("a"):
        href = anchor.attr("href")
        if not href:
            continue
        label = anchor.text()
        lowered = label.lower()
        if href.endswith(".pdf") or any(keyword in lowered for keyword in RESUME_KEYWORDS):
            url = resolve_url(href, base_url)
            if is_web_url(url):
                links.append(ResumeLink(url=url, text=label.strip()))
    return links
