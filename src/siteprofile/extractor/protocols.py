"""
Protocols for the queryable document the field extractors read from.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from bs4 import Tag


@runtime_checkable
class ParsedDocument(Protocol):
    """Read-only, selector-queryable view of one fetched page."""

    raw: str

    def select(self, selector: str) -> List[Tag]:
        """Return every element matching a CSS selector, in document order."""
        ...

    def select_one(self, selector: str) -> Optional[Tag]:
        """Return the first element matching a CSS selector, or None."""
        ...

    def exists(self, selector: str) -> bool:
        """Return True if any element matches the selector."""
        ...

    def count(self, selector: str) -> int:
        """Return the number of elements matching the selector."""
        ...

    def attr(self, selector: str, name: str) -> str:
        """Return an attribute of the first matching element, or an empty string."""
        ...

    def text(self, selector: Optional[str] = None) -> str:
        """Return the concatenated text of every match (the body when selector is None)."""
        ...

    def inner_html(self) -> str:
        """Return the inner markup of the body element."""
        ...
