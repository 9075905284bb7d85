"""
Content Extractors - Description, Forms, Products, Services and FAQs

Each extractor walks an ordered selector list from the pattern library and
returns typed records. Malformed embedded JSON-LD is skipped, never raised.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, List, Optional

import structlog
from bs4 import Tag

from .chains import first_nonempty, first_yielding_selector
from .document import inline_text, tag_attr, tag_text
from .models import FAQ, FormInfo, Product
from .patterns import (
    ABOUT_SELECTOR,
    EXCERPT_CHARS,
    FAQ_ANSWER_SELECTOR,
    FAQ_CONTAINER_SELECTOR,
    FAQ_JSON_LD_SELECTOR,
    FAQ_QUESTION_SELECTOR,
    FORM_FIELD_SELECTOR,
    MAX_PRODUCTS,
    PRODUCT_NAME_SELECTOR,
    PRODUCT_PRICE_SELECTOR,
    PRODUCT_SELECTORS,
    SERVICE_LIST_SELECTORS,
    SERVICE_TITLE_SELECTORS,
)
from .protocols import ParsedDocument

logger = structlog.get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def extract_description(doc: ParsedDocument) -> str:
    """Meta description, else the first paragraph, else the about section."""
    return first_nonempty(
        [
            lambda: doc.attr('meta[name="description"]', "content"),
            lambda: tag_text(doc.select_one("p")),
            lambda: doc.text(ABOUT_SELECTOR).strip(),
        ]
    )


def extract_raw_excerpt(doc: ParsedDocument) -> str:
    """The first characters of the body text with whitespace collapsed."""
    return _WHITESPACE.sub(" ", doc.text()[:EXCERPT_CHARS]).strip()


# --- Forms ---


def _mentions(form: Tag, keyword: str) -> bool:
    return keyword in tag_attr(form, "id") or keyword in tag_attr(form, "class")


def classify_form(form: Tag, field_count: int) -> str:
    """Label a form by the first rule it satisfies."""
    if form.select_one('input[type="search"]'):
        return "Search Form"
    if form.select_one('input[name*="email"], input[type="email"]') and field_count < 4:
        return "Newsletter Signup"
    if form.select_one('input[name*="contact"], textarea') or _mentions(form, "contact"):
        return "Contact Form"
    if form.select_one('input[type="password"]'):
        return "Login Form"
    if form.select_one('input[name*="search"]'):
        return "Search Form"
    if form.select_one('input[name*="subscribe"]'):
        return "Subscription Form"
    if form.select_one('input[name*="comment"]') or _mentions(form, "comment"):
        return "Comment Form"
    return "Unknown"


def extract_forms(doc: ParsedDocument) -> List[FormInfo]:
    forms = []
    for form in doc.select("form"):
        field_count = len(form.select(FORM_FIELD_SELECTOR))
        forms.append(FormInfo(form_type=classify_form(form, field_count), field_count=field_count))
    return forms


# --- Products and services ---


def _product(element: Tag) -> Optional[Product]:
    name = tag_text(element.select_one(PRODUCT_NAME_SELECTOR))
    if not name:
        return None
    price = tag_text(element.select_one(PRODUCT_PRICE_SELECTOR))
    return Product(name=name, price=price or None)


def extract_products(doc: ParsedDocument) -> List[Product]:
    """Named product cards from the first selector that finds any, capped."""
    return first_yielding_selector(doc, PRODUCT_SELECTORS, _product)[:MAX_PRODUCTS]


def _service_name(element: Tag) -> Optional[str]:
    return tag_text(element) or None


def extract_services(doc: ParsedDocument) -> List[str]:
    """Service titles from headings, falling back to service list items."""
    services = first_yielding_selector(doc, SERVICE_TITLE_SELECTORS, _service_name, dedupe=True)
    if services:
        return services
    return first_yielding_selector(doc, SERVICE_LIST_SELECTORS, _service_name, dedupe=True)


# --- FAQs ---


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, list):
        return value
    if value is None:
        return []
    return [value]


def _questions(data: Any) -> Iterable[FAQ]:
    for node in _as_list(data):
        if not isinstance(node, dict) or node.get("@type") != "FAQPage":
            continue
        for item in _as_list(node.get("mainEntity")):
            if not isinstance(item, dict) or item.get("@type") != "Question":
                continue
            answer = item.get("acceptedAnswer")
            answer_text = answer.get("text") if isinstance(answer, dict) else None
            if item.get("name") and answer_text:
                yield FAQ(question=str(item["name"]), answer=str(answer_text))


def _json_ld_faqs(doc: ParsedDocument) -> List[FAQ]:
    faqs: List[FAQ] = []
    for script in doc.select(FAQ_JSON_LD_SELECTOR):
        try:
            data = json.loads(inline_text(script) or "{}")
        except (json.JSONDecodeError, RecursionError) as e:
            logger.debug("Skipping malformed JSON-LD block", error=str(e))
            continue
        faqs.extend(_questions(data))
    return faqs


def _accordion_faqs(doc: ParsedDocument) -> List[FAQ]:
    faqs = []
    for item in doc.select(FAQ_CONTAINER_SELECTOR):
        question = tag_text(item.select_one(FAQ_QUESTION_SELECTOR))
        answer = tag_text(item.select_one(FAQ_ANSWER_SELECTOR))
        if question and answer:
            faqs.append(FAQ(question=question, answer=answer))
    return faqs


def _definition_list_faqs(doc: ParsedDocument) -> List[FAQ]:
    faqs = []
    for definition_list in doc.select("dl"):
        terms = definition_list.select("dt")
        definitions = definition_list.select("dd")
        for index, term in enumerate(terms):
            question = tag_text(term)
            answer = tag_text(definitions[index]) if index < len(definitions) else ""
            if question and answer:
                faqs.append(FAQ(question=question, answer=answer))
    return faqs


def extract_faqs(doc: ParsedDocument) -> List[FAQ]:
    """
    Question/answer pairs.

    FAQPage structured data wins outright; markup heuristics (accordion items,
    then definition lists) are consulted only when it yields nothing.
    """
    faqs = _json_ld_faqs(doc)
    if faqs:
        return faqs
    return _accordion_faqs(doc) + _definition_list_faqs(doc)
