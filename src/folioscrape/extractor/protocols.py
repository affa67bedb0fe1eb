"""
Protocols for the queryable document the extraction passes read from.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class Element(Protocol):
    """A single node of a parsed HTML document."""

    def text(self) -> str:
        """Return the concatenated text of this node and its descendants."""
        ...

    def attr(self, name: str) -> str | None:
        """Return the attribute value, or None when the attribute is absent."""
        ...

    def select(self, selector: str) -> Sequence[Element]:
        """Return descendants matching a CSS selector, in document order."""
        ...

    def find_next(self, tag: str) -> Element | None:
        """Return the first element named ``tag`` after this node in document order."""
        ...


@runtime_checkable
class Document(Protocol):
    """Read-only view of a parsed HTML page.

    Selectors are limited to tag names, ``.class``, ``#id``, descendant
    combinators and comma-separated groups.
    """

    def select(self, selector: str) -> Sequence[Element]:
        """Return all elements matching a CSS selector, in document order."""
        ...
