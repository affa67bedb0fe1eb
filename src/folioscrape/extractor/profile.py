"""
Candidate name and bio passes.
"""

from __future__ import annotations

import re

from .protocols import Document

UNKNOWN_NAME = "Unknown"
NO_BIO = "No bio available"

# Priority order: the first selector yielding a usable text wins.
NAME_SELECTORS = (
    "h1",
    ".name",
    "#name",
    ".title h1",
    ".header h1",
    ".intro h1",
    ".hero h1",
    "title",
)
MAX_NAME_LENGTH = 100
_TITLE_NOISE = re.compile(r"portfolio|website|home", re.IGNORECASE)

BIO_SELECTORS = (
    ".about",
    "#about",
    ".bio",
    "#bio",
    ".introduction",
    ".intro",
    ".description",
    ".summary",
)
MIN_BIO_LENGTH = 50
BIO_HEADINGS = "h1, h2, h3, h4"
_BIO_HEADING_TEXT = re.compile(r"about|bio|introduction|summary", re.IGNORECASE)


def _first_text(doc: Document, selector: str) -> str:
    matches = doc.select(selector)
    return matches[0].text().strip() if matches else ""


def extract_name(doc: Document) -> str:
    """Return the candidate's name, or ``"Unknown"``."""
    for selector in NAME_SELECTORS:
        text = _first_text(doc, selector)
        if not text or len(text) >= MAX_NAME_LENGTH:
            continue
        if selector == "title":
            # "Jane Doe - Portfolio" style page titles
            return _TITLE_NOISE.sub("", text).strip() or UNKNOWN_NAME
        return text
    return UNKNOWN_NAME


def extract_bio(doc: Document) -> str:
    """Return the candidate's bio, or ``"No bio available"``.

    A dedicated about/bio container is accepted only when its text is longer
    than ``MIN_BIO_LENGTH``. Otherwise the first paragraph after the first
    about-like heading is used.
    """
    for selector in BIO_SELECTORS:
        text = "".join(element.text() for element in doc.select(selector)).strip()
        if len(text) > MIN_BIO_LENGTH:
            return text

    for heading in doc.select(BIO_HEADINGS):
        if not _BIO_HEADING_TEXT.search(heading.text()):
            continue
        paragraph = heading.find_next("p")
        text = paragraph.text().strip() if paragraph is not None else ""
        return text or NO_BIO

    return NO_BIO
