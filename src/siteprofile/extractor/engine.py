"""
Profile Extractor - assembles the business profile record from fetched pages.

The extractor is pure: it takes markup and headers that were already fetched
and never touches the network. A page that yields nothing still produces a
complete record of empty defaults.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

import structlog

from .chains import unique
from .classifier import determine_business_type
from .contact import (
    detect_languages,
    extract_address,
    extract_contact_info,
    extract_email,
    extract_phone,
    extract_social_media,
    has_privacy_policy,
    has_terms_of_service,
)
from .content import (
    extract_description,
    extract_faqs,
    extract_forms,
    extract_products,
    extract_raw_excerpt,
    extract_services,
)
from .document import SoupDocument, tag_text
from .models import ExtractionRecord
from .seo import detect_technologies, extract_seo_info
from .structure import (
    analyze_page_structure,
    analyze_performance,
    analyze_security,
    check_accessibility,
    check_mobile_optimization,
    extract_media,
    extract_navigation,
)

logger = structlog.get_logger(__name__)

Markup = Union[str, bytes, None]

INDEX_DOCUMENT = "index.html"


def derive_index_url(url: str) -> Optional[str]:
    """
    Return the explicit index page URL for ``url``, or None.

    URLs already ending in ``/`` or ``index.html`` are not expanded.
    """
    if url.endswith("/") or url.endswith(INDEX_DOCUMENT):
        return None
    return f"{url}/{INDEX_DOCUMENT}"


class ProfileExtractor:
    """Runs every field extractor and merges primary and index page results."""

    def __init__(self, parser: str = "html.parser") -> None:
        self.parser = parser

    def parse(self, markup: Markup) -> SoupDocument:
        return SoupDocument(markup, parser=self.parser)

    def extract(
        self,
        primary_html: Markup,
        headers: Optional[Mapping[str, str]] = None,
        index_html: Markup = None,
        url: Optional[str] = None,
    ) -> ExtractionRecord:
        """
        Build the record for one request.

        Args:
            primary_html: Markup of the requested page.
            headers: Lower-cased response headers of the primary fetch.
            index_html: Markup of the index page; the primary page stands in
                when it is None.
            url: The requested URL, used for transport-level signals.
        """
        headers = {key.lower(): value for key, value in (headers or {}).items()}
        primary = self.parse(primary_html)
        index = primary if index_html is None else self.parse(index_html)

        seo_info = extract_seo_info(primary)
        title = seo_info.title or tag_text(index.select_one("title"))

        record = ExtractionRecord(
            website_title=title,
            email=extract_email(primary) or extract_email(index),
            phone=extract_phone(index) or extract_phone(primary),
            address=extract_address(primary) or extract_address(index),
            social_media=unique(extract_social_media(primary) + extract_social_media(index)),
            seo_info=seo_info,
            technologies=detect_technologies(primary, headers),
            page_structure=analyze_page_structure(primary),
            performance=analyze_performance(primary, headers),
            security=analyze_security(primary, headers, url=url),
            accessibility=check_accessibility(primary),
            media=extract_media(primary),
            navigation=extract_navigation(primary),
            mobile_optimization=check_mobile_optimization(primary),
            forms=extract_forms(primary),
            products=extract_products(primary),
            services=extract_services(primary),
            faqs=extract_faqs(primary),
            contact_info=extract_contact_info(primary),
            privacy_policy=has_privacy_policy(primary),
            terms_of_service=has_terms_of_service(primary),
            languages=detect_languages(primary),
            raw_content_excerpt=extract_raw_excerpt(primary),
            description=extract_description(primary),
        )
        # Classification reads the primary page's own title, not the merged one
        record.business_type = determine_business_type(primary, seo_info.title, seo_info.meta_description)

        logger.debug(
            "Profile extracted",
            url=url,
            business_type=record.business_type,
            used_index=index is not primary,
            technologies=len(record.technologies),
        )
        return record
