"""
Contact Field Extractors - Email, Phone, Address and Social Presence

Derives the contact block of a business profile from a parsed page and its raw
markup. Every extractor returns an empty value rather than raising when the
page carries no matching signal.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

from bs4 import Tag

from .chains import first_qualifying
from .document import tag_attr, tag_text
from .patterns import (
    ADDRESS_SELECTORS,
    CONTACT_ADDRESS_SELECTOR,
    CONTACT_HOURS_SELECTOR,
    CONTACT_PHONE_PATTERN,
    CONTACT_SECTION_SELECTORS,
    EMAIL_PATTERN,
    LANGUAGE_SWITCHER_SELECTOR,
    MAILTO_SELECTOR,
    MAX_LANGUAGE_CODE_LENGTH,
    MIN_ADDRESS_LENGTH,
    MIN_PHONE_DIGITS,
    PHONE_PATTERNS,
    SOCIAL_HINT_SELECTOR,
    SOCIAL_PLATFORMS,
    TEL_ANCHOR_PATTERN,
    TEL_TARGET_PATTERN,
    VISIBLE_PHONE_PATTERN,
)
from .protocols import ParsedDocument

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone(value: str) -> str:
    """Keep digits only, plus a leading '+' when the number had one."""
    digits = _NON_DIGITS.sub("", value)
    if digits and value.strip().startswith("+"):
        return "+" + digits
    return digits


def _accept_phone(candidate: str) -> str:
    phone = normalize_phone(candidate)
    return phone if len(phone) >= MIN_PHONE_DIGITS else ""


def extract_email(doc: ParsedDocument) -> str:
    """
    Find a contact email address.

    The body markup is scanned first so addresses in display text or attributes
    win over the target of the first mailto: link.
    """
    match = EMAIL_PATTERN.search(doc.inner_html())
    if match:
        return match.group(0)

    href = doc.attr(MAILTO_SELECTOR, "href")
    if href:
        return href.replace("mailto:", "", 1).split("?")[0]

    return ""


def extract_phone(doc: ParsedDocument) -> str:
    """
    Find a phone number, normalized to digits with an optional leading '+'.

    Each raw-markup pattern contributes only its first match; a match shorter
    than the minimum digit count moves on to the next pattern.
    """
    raw = doc.raw

    for pattern in PHONE_PATTERNS:
        match = pattern.search(raw)
        if match is None:
            continue
        candidate = match.group(0)
        tel = TEL_TARGET_PATTERN.search(candidate)
        if tel:
            candidate = tel.group(1)
        phone = _accept_phone(candidate)
        if phone:
            return phone

    visible = VISIBLE_PHONE_PATTERN.search(doc.text())
    if visible:
        phone = _accept_phone(visible.group(0))
        if phone:
            return phone

    anchor = TEL_ANCHOR_PATTERN.search(raw)
    if anchor:
        return _accept_phone(anchor.group(1))

    return ""


def extract_address(doc: ParsedDocument) -> str:
    """First address container whose text is long enough to be a real address."""
    candidates = (tag_text(doc.select_one(selector)) for selector in ADDRESS_SELECTORS)
    return first_qualifying(candidates, lambda text: len(text) > MIN_ADDRESS_LENGTH) or ""


def _platform_url(href: str) -> Optional[str]:
    for platform in SOCIAL_PLATFORMS:
        if platform not in href:
            continue
        if href.startswith("http"):
            return href
        if href.startswith("//"):
            return f"https:{href}"
        if href.startswith("/"):
            return f"https://{platform}{href}"
        return f"https://{platform}/{href}"
    return None


def extract_social_media(doc: ParsedDocument) -> List[str]:
    """Absolute social profile URLs in document order, exact duplicates removed."""
    links: List[str] = []

    for anchor in doc.select("a[href]"):
        url = _platform_url(tag_attr(anchor, "href"))
        if url and url not in links:
            links.append(url)

    # Icon links recognised only by class or ARIA label
    for element in doc.select(SOCIAL_HINT_SELECTOR):
        href = tag_attr(element, "href")
        if not href or href.startswith("#") or not href.startswith("http"):
            continue
        if href not in links:
            links.append(href)

    return links


def _first_sub_text(sections: Sequence[Tag], selector: str) -> str:
    for section in sections:
        element = section.select_one(selector)
        if element is not None:
            return tag_text(element)
    return ""


def extract_contact_info(doc: ParsedDocument) -> Dict[str, str]:
    """
    Collect email, phone, address and hours from contact-like containers.

    Containers are visited in priority order and every one of them is read;
    each key keeps the first value found.
    """
    info: Dict[str, str] = {}

    for selector in CONTACT_SECTION_SELECTORS:
        sections = doc.select(selector)
        if not sections:
            continue
        section_text = "".join(section.get_text() for section in sections)

        if "email" not in info:
            email = EMAIL_PATTERN.search(section_text)
            if email:
                info["email"] = email.group(0)

        if "phone" not in info:
            phone = CONTACT_PHONE_PATTERN.search(section_text)
            if phone:
                info["phone"] = phone.group(0)

        if "address" not in info:
            address = _first_sub_text(sections, CONTACT_ADDRESS_SELECTOR)
            if address:
                info["address"] = address

        if "hours" not in info:
            hours = _first_sub_text(sections, CONTACT_HOURS_SELECTOR)
            if hours:
                info["hours"] = hours

    return info


def _has_link_mentioning(doc: ParsedDocument, keyword: str) -> bool:
    for anchor in doc.select("a"):
        if keyword in tag_attr(anchor, "href").lower() or keyword in anchor.get_text().lower():
            return True
    return False


def has_privacy_policy(doc: ParsedDocument) -> bool:
    return _has_link_mentioning(doc, "privacy")


def has_terms_of_service(doc: ParsedDocument) -> bool:
    return _has_link_mentioning(doc, "terms")


def detect_languages(doc: ParsedDocument) -> List[str]:
    """The <html lang> value followed by short codes from language switchers."""
    languages: List[str] = []

    html_lang = doc.attr("html", "lang")
    if html_lang:
        languages.append(html_lang)

    for anchor in doc.select(LANGUAGE_SWITCHER_SELECTOR):
        lang = tag_attr(anchor, "hreflang") or tag_attr(anchor, "lang") or tag_text(anchor)
        if lang and len(lang) <= MAX_LANGUAGE_CODE_LENGTH and lang not in languages:
            languages.append(lang)

    return languages
