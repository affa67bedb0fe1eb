"""
BeautifulSoup-backed implementation of the Document protocol.
"""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup, Tag

DEFAULT_PARSER = "html.parser"


class SoupElement:
    """Element wrapper around a BeautifulSoup ``Tag``."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def text(self) -> str:
        return self._tag.get_text()

    def attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 returns multi-valued attributes such as class as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def select(self, selector: str) -> List[SoupElement]:
        return [SoupElement(tag) for tag in self._tag.select(selector)]

    def find_next(self, tag: str) -> SoupElement | None:
        found = self._tag.find_next(tag)
        return SoupElement(found) if isinstance(found, Tag) else None

    def __repr__(self) -> str:
        return f"SoupElement(<{self._tag.name}>)"


class SoupDocument:
    """Parsed HTML page queried with CSS selectors through soupsieve."""

    def __init__(self, html: str, parser: str = DEFAULT_PARSER) -> None:
        self._soup = BeautifulSoup(html or "", parser)

    def select(self, selector: str) -> List[SoupElement]:
        return [SoupElement(tag) for tag in self._soup.select(selector)]


def parse_html(html: str, parser: str = DEFAULT_PARSER) -> SoupDocument:
    """Parse raw HTML into a queryable document."""
    return SoupDocument(html, parser)
