"""
Ordered fallback chains.

Selector and pattern priority lists are plain data; these helpers are the
single place that walks them.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, Optional, Sequence, TypeVar

from bs4 import Tag

from .protocols import ParsedDocument

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)


def first_qualifying(candidates: Iterable[T], predicate: Callable[[T], bool] = bool) -> Optional[T]:
    """Return the first candidate satisfying the predicate, or None."""
    for candidate in candidates:
        if predicate(candidate):
            return candidate
    return None


def first_nonempty(producers: Iterable[Callable[[], str]]) -> str:
    """Evaluate producers lazily and return the first non-empty string."""
    for produce in producers:
        value = produce()
        if value:
            return value
    return ""


def first_yielding_selector(
    doc: ParsedDocument,
    selectors: Sequence[str],
    collect: Callable[[Tag], Optional[T]],
    *,
    dedupe: bool = False,
) -> List[T]:
    """
    Apply ``collect`` to every match of each selector in turn.

    Returns the items gathered by the first selector that produced at least
    one item; later selectors are never evaluated.
    """
    for selector in selectors:
        items: List[T] = []
        for element in doc.select(selector):
            item = collect(element)
            if item is None:
                continue
            if dedupe and item in items:
                continue
            items.append(item)
        if items:
            return items
    return []


def unique(values: Iterable[H]) -> List[H]:
    """Order-preserving exact-value deduplication."""
    seen = set()
    result: List[H] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
