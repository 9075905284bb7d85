"""
BeautifulSoup-backed implementation of the ParsedDocument capability.
"""

from __future__ import annotations

from typing import List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from .protocols import ParsedDocument


def tag_attr(tag: Optional[Tag], name: str) -> str:
    """Return an attribute value as a string; multi-valued attributes are space-joined."""
    if tag is None:
        return ""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def has_attr(tag: Tag, name: str) -> bool:
    return tag.get(name) is not None


def tag_text(tag: Optional[Tag]) -> str:
    """Trimmed text content of a tag, or an empty string."""
    if tag is None:
        return ""
    return tag.get_text().strip()


def inline_text(tag: Tag) -> str:
    """Raw string content of a tag, including <script> and <style> bodies."""
    return "".join(str(child) for child in tag.contents if isinstance(child, NavigableString))


class SoupDocument(ParsedDocument):
    """A parsed page plus the raw markup it was built from."""

    def __init__(self, raw: Optional[Union[str, bytes]], parser: str = "html.parser") -> None:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        self.raw: str = raw or ""
        self.soup = BeautifulSoup(self.raw, parser)

    @property
    def body(self) -> Union[BeautifulSoup, Tag]:
        # html.parser does not synthesize <body> for fragments
        return self.soup.body or self.soup

    def select(self, selector: str) -> List[Tag]:
        return list(self.soup.select(selector))

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def exists(self, selector: str) -> bool:
        return self.soup.select_one(selector) is not None

    def count(self, selector: str) -> int:
        return len(self.soup.select(selector))

    def attr(self, selector: str, name: str) -> str:
        return tag_attr(self.soup.select_one(selector), name)

    def text(self, selector: Optional[str] = None) -> str:
        if selector is None:
            return self.body.get_text()
        return "".join(element.get_text() for element in self.soup.select(selector))

    def inner_html(self) -> str:
        return self.body.decode_contents()

    def __repr__(self) -> str:
        return f"SoupDocument(length={len(self.raw)})"
