"""
Page Structure Probes - Layout, Performance, Security and Accessibility

Fixed bundles of independent selector probes. None of them depend on each
other, so each bundle is a straight mapping from selectors to record fields.
"""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import urlparse

from bs4 import Tag

from .chains import first_yielding_selector
from .document import inline_text, tag_attr
from .models import (
    AccessibilityInfo,
    ImageRef,
    MediaInfo,
    MenuItem,
    MobileOptimization,
    NavigationInfo,
    PageStructure,
    PerformanceInfo,
    SecurityInfo,
    VideoRef,
)
from .patterns import (
    BREADCRUMB_SELECTOR,
    CAPTCHA_SELECTOR,
    DROPDOWN_SELECTOR,
    FLEX_STYLE_SELECTOR,
    GRID_STYLE_SELECTOR,
    MAX_IMAGES,
    MAX_MENU_ITEMS,
    MAX_VIDEOS,
    MOBILE_CLASS_SELECTOR,
    MOBILE_MENU_SELECTOR,
    NAVIGATION_SELECTORS,
    NOT_SPECIFIED,
    PAGE_STRUCTURE_SELECTORS,
    SKIP_LINK_SELECTOR,
    VIDEO_SELECTOR,
)
from .protocols import ParsedDocument

Headers = Mapping[str, str]


def analyze_page_structure(doc: ParsedDocument) -> PageStructure:
    """
    Detect layout landmarks and classify links.

    A link is internal when it is root-relative or starts with the canonical
    URL; external when it is absolute and does not mention the canonical URL.
    """
    canonical = doc.attr('link[rel="canonical"]', "href")
    hrefs = [tag_attr(anchor, "href") for anchor in doc.select("a")]

    internal = sum(1 for href in hrefs if href.startswith("/") or (canonical and href.startswith(canonical)))
    external = sum(1 for href in hrefs if href.startswith("http") and not (canonical and canonical in href))

    flags = {field: doc.exists(selector) for field, selector in PAGE_STRUCTURE_SELECTORS.items()}
    return PageStructure(
        **flags,
        total_links=len(hrefs),
        internal_links=internal,
        external_links=external,
        total_images=doc.count("img"),
    )


def analyze_performance(doc: ParsedDocument, headers: Optional[Headers] = None) -> PerformanceInfo:
    headers = headers or {}
    return PerformanceInfo(
        total_scripts=doc.count("script"),
        total_stylesheets=doc.count('link[rel="stylesheet"]'),
        total_images=doc.count("img"),
        total_iframes=doc.count("iframe"),
        lazy_load_images=doc.count('img[loading="lazy"]'),
        response_headers={
            "server": headers.get("server") or NOT_SPECIFIED,
            "cacheControl": headers.get("cache-control") or NOT_SPECIFIED,
            "contentEncoding": headers.get("content-encoding") or NOT_SPECIFIED,
        },
    )


def _has_login_form(doc: ParsedDocument) -> bool:
    return any(form.select_one('input[type="password"]') is not None for form in doc.select("form"))


def analyze_security(
    doc: ParsedDocument, headers: Optional[Headers] = None, url: Optional[str] = None
) -> SecurityInfo:
    """Security headers, HTTPS transport and credential-related markup."""
    headers = headers or {}
    return SecurityInfo(
        has_https=bool(url) and urlparse(url).scheme.lower() == "https",
        has_csp=bool(headers.get("content-security-policy")),
        has_xss_protection=bool(headers.get("x-xss-protection")),
        has_hsts=bool(headers.get("strict-transport-security")),
        password_fields=doc.exists('input[type="password"]'),
        captcha_present=doc.exists(CAPTCHA_SELECTOR),
        login_form=_has_login_form(doc),
    )


def check_accessibility(doc: ParsedDocument) -> AccessibilityInfo:
    return AccessibilityInfo(
        has_aria_labels=doc.exists("[aria-label]"),
        has_aria_describedby=doc.exists("[aria-describedby]"),
        has_aria_live=doc.exists("[aria-live]"),
        has_alt_text=doc.count("img[alt]"),
        missing_alt_text=doc.count("img:not([alt])"),
        has_skip_links=doc.exists(SKIP_LINK_SELECTOR),
        has_language_attribute=doc.exists("html[lang]"),
        has_tab_index=doc.exists("[tabindex]"),
    )


def extract_media(doc: ParsedDocument) -> MediaInfo:
    """Image and video sources (capped) plus embedded-media flags."""
    images = [
        ImageRef(src=tag_attr(img, "src"), alt=tag_attr(img, "alt"))
        for img in doc.select("img")
        if tag_attr(img, "src")
    ]
    videos = [VideoRef(src=tag_attr(video, "src")) for video in doc.select(VIDEO_SELECTOR) if tag_attr(video, "src")]

    return MediaInfo(
        images=images[:MAX_IMAGES],
        videos=videos[:MAX_VIDEOS],
        has_audio=doc.exists("audio"),
        has_video=doc.exists("video"),
        has_embedded_content=doc.exists("iframe"),
        has_youtube=doc.exists('iframe[src*="youtube"]'),
        has_vimeo=doc.exists('iframe[src*="vimeo"]'),
    )


def _menu_item(link: Tag) -> Optional[MenuItem]:
    text = link.get_text().strip()
    href = tag_attr(link, "href")
    if text and href:
        return MenuItem(text=text, href=href)
    return None


def extract_navigation(doc: ParsedDocument) -> NavigationInfo:
    """Menu links from the first navigation container that has any."""
    link_selectors = [f"{selector} a" for selector in NAVIGATION_SELECTORS]
    menu_items = first_yielding_selector(doc, link_selectors, _menu_item)

    return NavigationInfo(
        menu_items=menu_items[:MAX_MENU_ITEMS],
        has_dropdown_menu=doc.exists(DROPDOWN_SELECTOR),
        has_mobile_menu=doc.exists(MOBILE_MENU_SELECTOR),
        has_breadcrumbs=doc.exists(BREADCRUMB_SELECTOR),
    )


def check_mobile_optimization(doc: ParsedDocument) -> MobileOptimization:
    styles = "".join(inline_text(style) for style in doc.select("style"))

    return MobileOptimization(
        has_viewport_meta=doc.exists('meta[name="viewport"]'),
        responsive_meta_content=doc.attr('meta[name="viewport"]', "content"),
        has_mobile_specific_classes=doc.exists(MOBILE_CLASS_SELECTOR),
        has_media_queries="@media" in styles or doc.exists("link[media]"),
        uses_flexbox=doc.exists(FLEX_STYLE_SELECTOR) or "display: flex" in styles,
        uses_grid=doc.exists(GRID_STYLE_SELECTOR) or "display: grid" in styles,
    )
