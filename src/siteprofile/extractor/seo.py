"""
SEO metadata and technology fingerprinting.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .chains import unique
from .document import inline_text, tag_attr, tag_text
from .models import HeadingCounts, SEOInfo
from .protocols import ParsedDocument

Headers = Mapping[str, str]
TechnologyProbe = Callable[[ParsedDocument, Headers], Optional[str]]


def _prefixed_tags(doc: ParsedDocument, selector: str, attribute: str, prefix: str) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    for meta in doc.select(selector):
        key = tag_attr(meta, attribute)
        content = tag_attr(meta, "content")
        if key and content:
            tags[key.replace(prefix, "", 1)] = content
    return tags


def extract_seo_info(doc: ParsedDocument) -> SEOInfo:
    """Title, meta tags, canonical link, heading counts and social card tags."""
    return SEOInfo(
        title=tag_text(doc.select_one("title")),
        meta_description=doc.attr('meta[name="description"]', "content"),
        meta_keywords=doc.attr('meta[name="keywords"]', "content"),
        canonical_url=doc.attr('link[rel="canonical"]', "href"),
        og_tags=_prefixed_tags(doc, 'meta[property^="og:"]', "property", "og:"),
        twitter_tags=_prefixed_tags(doc, 'meta[name^="twitter:"]', "name", "twitter:"),
        headings=HeadingCounts(h1=doc.count("h1"), h2=doc.count("h2"), h3=doc.count("h3")),
        img_alt_tags=doc.count("img[alt]"),
        img_missing_alt=doc.count("img:not([alt])"),
    )


def _inline_scripts_mention(doc: ParsedDocument, needle: str) -> bool:
    return any(needle in inline_text(script) for script in doc.select("script"))


def _selector_probe(label: str, *selectors: str) -> TechnologyProbe:
    def probe(doc: ParsedDocument, headers: Headers) -> Optional[str]:
        return label if any(doc.exists(selector) for selector in selectors) else None

    return probe


def _google_analytics(doc: ParsedDocument, headers: Headers) -> Optional[str]:
    if doc.exists('script[src*="google-analytics"], script[src*="gtag"]') or _inline_scripts_mention(doc, "gtag"):
        return "Google Analytics"
    return None


def _facebook_pixel(doc: ParsedDocument, headers: Headers) -> Optional[str]:
    if doc.exists('script[src*="facebook"]') or _inline_scripts_mention(doc, "fbq"):
        return "Facebook Pixel"
    return None


def _header_probe(header: str, template: str) -> TechnologyProbe:
    def probe(doc: ParsedDocument, headers: Headers) -> Optional[str]:
        value = headers.get(header)
        return template.format(value) if value else None

    return probe


# Probes run in this order; the output keeps it.
TECHNOLOGY_PROBES: List[Tuple[str, TechnologyProbe]] = [
    ("jquery", _selector_probe("jQuery", 'script[src*="jquery"]')),
    ("bootstrap", _selector_probe("Bootstrap", 'script[src*="bootstrap"]', 'link[href*="bootstrap"]')),
    ("react", _selector_probe("React", 'script[src*="react"]')),
    ("vue", _selector_probe("Vue.js", 'script[src*="vue"]')),
    ("angular", _selector_probe("Angular", 'script[src*="angular"]')),
    ("gsap", _selector_probe("GSAP", 'script[src*="gsap"]')),
    ("google_analytics", _google_analytics),
    ("facebook_pixel", _facebook_pixel),
    (
        "wordpress",
        _selector_probe("WordPress", 'meta[name="generator"][content*="WordPress"]', 'link[rel="https://api.w.org/"]'),
    ),
    ("shopify", _selector_probe("Shopify", 'script[src*="shopify"]', 'link[href*="shopify"]')),
    ("drupal", _selector_probe("Drupal", 'meta[name="generator"][content*="Drupal"]')),
    ("joomla", _selector_probe("Joomla", 'meta[name="generator"][content*="Joomla"]')),
    ("wix", _selector_probe("Wix", 'meta[name="generator"][content*="Wix"]', 'script[src*="wix.com"]')),
    ("server", _header_probe("server", "Server: {}")),
    ("powered_by", _header_probe("x-powered-by", "Powered by: {}")),
]


def detect_technologies(doc: ParsedDocument, headers: Optional[Headers] = None) -> List[str]:
    """Run every technology probe and return the labels that fired."""
    headers = headers or {}
    labels = (probe(doc, headers) for _, probe in TECHNOLOGY_PROBES)
    return unique(label for label in labels if label)
