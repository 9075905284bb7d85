"""
SiteProfile Extraction Module - Rule-Based Business Profile Extractor

Turns the markup of a business website into a structured profile:
1. Contact fields: email, phone, address, social profiles, contact block
2. Metadata: SEO tags, technology fingerprints, languages
3. Layout probes: structure, performance, security, accessibility, media
4. Content: description, forms, products, services, FAQs
5. Keyword-frequency business classification

Every extractor is a pure function of a parsed document; absent signals
produce typed empty defaults rather than errors.
"""

from .classifier import BusinessClassifier, CategoryScore, determine_business_type
from .document import SoupDocument
from .engine import ProfileExtractor, derive_index_url
from .models import (
    FAQ,
    AccessibilityInfo,
    ExtractionRecord,
    FormInfo,
    MediaInfo,
    MobileOptimization,
    NavigationInfo,
    PageStructure,
    PerformanceInfo,
    Product,
    SecurityInfo,
    SEOInfo,
)
from .protocols import ParsedDocument

__all__ = [
    "ProfileExtractor",
    "derive_index_url",
    "BusinessClassifier",
    "CategoryScore",
    "determine_business_type",
    "SoupDocument",
    "ParsedDocument",
    "ExtractionRecord",
    "SEOInfo",
    "PageStructure",
    "PerformanceInfo",
    "SecurityInfo",
    "AccessibilityInfo",
    "MediaInfo",
    "NavigationInfo",
    "MobileOptimization",
    "FormInfo",
    "Product",
    "FAQ",
]
