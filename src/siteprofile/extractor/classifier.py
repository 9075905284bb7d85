"""
Keyword-frequency business classifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Tuple

from .patterns import BUSINESS_TYPES, CLASSIFIER_BODY_CHARS, MIN_CATEGORY_HITS, UNKNOWN_BUSINESS_TYPE
from .protocols import ParsedDocument


@dataclass
class CategoryScore:
    """Whole-word keyword hits for one business category."""

    label: str
    count: int = 0


class BusinessClassifier:
    """
    Classify a text sample into the category with the most keyword hits.

    Categories are compared in declaration order with a strictly-greater test,
    so the earlier category keeps a tie. A best count below ``min_hits`` means
    there is not enough evidence and the classifier answers ``Unknown``.
    """

    def __init__(
        self,
        categories: Optional[Sequence[Tuple[str, Sequence[str]]]] = None,
        min_hits: int = MIN_CATEGORY_HITS,
    ) -> None:
        self.min_hits = min_hits
        self._categories: List[Tuple[str, List[Pattern[str]]]] = [
            (label, [re.compile(rf"\b{re.escape(keyword)}\b") for keyword in keywords])
            for label, keywords in (categories or BUSINESS_TYPES)
        ]

    def score(self, text: str) -> List[CategoryScore]:
        sample = text.lower()
        return [
            CategoryScore(label=label, count=sum(len(pattern.findall(sample)) for pattern in patterns))
            for label, patterns in self._categories
        ]

    def classify(self, text: str) -> str:
        best = CategoryScore(label=UNKNOWN_BUSINESS_TYPE)
        for candidate in self.score(text):
            if candidate.count > best.count:
                best = candidate

        if best.count < self.min_hits:
            return UNKNOWN_BUSINESS_TYPE
        return best.label


_default_classifier = BusinessClassifier()


def determine_business_type(doc: ParsedDocument, title: str, meta_description: str) -> str:
    """Classify a page from its title, meta description and leading body text."""
    sample = f"{title} {meta_description} {doc.text()[:CLASSIFIER_BODY_CHARS]}"
    return _default_classifier.classify(sample)
