"""
Data models for the extracted business profile.

Field names are snake_case in Python and camelCase on the wire; every field has
a typed empty default so a record built from an empty page is still complete.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HeadingCounts(RecordModel):
    h1: int = 0
    h2: int = 0
    h3: int = 0


class SEOInfo(RecordModel):
    title: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    canonical_url: str = ""
    og_tags: Dict[str, str] = Field(default_factory=dict)
    twitter_tags: Dict[str, str] = Field(default_factory=dict)
    headings: HeadingCounts = Field(default_factory=HeadingCounts)
    img_alt_tags: int = 0
    img_missing_alt: int = 0


class PageStructure(RecordModel):
    has_header: bool = False
    has_footer: bool = False
    has_navigation: bool = False
    has_slider: bool = False
    has_sidebar: bool = False
    has_cookie_banner: bool = False
    total_links: int = 0
    internal_links: int = 0
    external_links: int = 0
    total_images: int = 0


class PerformanceInfo(RecordModel):
    total_scripts: int = 0
    total_stylesheets: int = 0
    total_images: int = 0
    total_iframes: int = 0
    lazy_load_images: int = 0
    response_headers: Dict[str, str] = Field(default_factory=dict)


class SecurityInfo(RecordModel):
    has_https: bool = False
    has_csp: bool = False
    has_xss_protection: bool = False
    has_hsts: bool = False
    password_fields: bool = False
    captcha_present: bool = False
    login_form: bool = False


class AccessibilityInfo(RecordModel):
    has_aria_labels: bool = False
    has_aria_describedby: bool = False
    has_aria_live: bool = False
    has_alt_text: int = 0
    missing_alt_text: int = 0
    has_skip_links: bool = False
    has_language_attribute: bool = False
    has_tab_index: bool = False


class ImageRef(RecordModel):
    src: str
    alt: str = ""


class VideoRef(RecordModel):
    src: str


class MediaInfo(RecordModel):
    images: List[ImageRef] = Field(default_factory=list)
    videos: List[VideoRef] = Field(default_factory=list)
    has_audio: bool = False
    has_video: bool = False
    has_embedded_content: bool = False
    has_youtube: bool = Field(default=False, alias="hasYouTube")
    has_vimeo: bool = False


class MenuItem(RecordModel):
    text: str
    href: str


class NavigationInfo(RecordModel):
    menu_items: List[MenuItem] = Field(default_factory=list)
    has_dropdown_menu: bool = False
    has_mobile_menu: bool = False
    has_breadcrumbs: bool = False


class MobileOptimization(RecordModel):
    has_viewport_meta: bool = False
    responsive_meta_content: str = ""
    has_mobile_specific_classes: bool = False
    has_media_queries: bool = False
    uses_flexbox: bool = False
    uses_grid: bool = False


class FormInfo(RecordModel):
    form_type: str = Field(default="Unknown", alias="type")
    field_count: int = Field(default=0, alias="fields")


class Product(RecordModel):
    name: str
    price: Optional[str] = None


class FAQ(RecordModel):
    question: str
    answer: str


class ExtractionRecord(RecordModel):
    """The complete business profile derived from one page."""

    website_title: str = ""
    business_type: str = ""
    description: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    social_media: List[str] = Field(default_factory=list)
    seo_info: SEOInfo = Field(default_factory=SEOInfo)
    technologies: List[str] = Field(default_factory=list)
    page_structure: PageStructure = Field(default_factory=PageStructure)
    performance: PerformanceInfo = Field(default_factory=PerformanceInfo)
    security: SecurityInfo = Field(default_factory=SecurityInfo)
    accessibility: AccessibilityInfo = Field(default_factory=AccessibilityInfo)
    media: MediaInfo = Field(default_factory=MediaInfo)
    navigation: NavigationInfo = Field(default_factory=NavigationInfo)
    mobile_optimization: MobileOptimization = Field(default_factory=MobileOptimization)
    forms: List[FormInfo] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)
    services: List[str] = Field(default_factory=list)
    faqs: List[FAQ] = Field(default_factory=list)
    contact_info: Dict[str, str] = Field(default_factory=dict)
    privacy_policy: bool = False
    terms_of_service: bool = False
    languages: List[str] = Field(default_factory=list)
    raw_content_excerpt: str = ""
    other_info: Dict[str, str] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with wire (camelCase) keys, omitting absent product prices."""
        return self.model_dump(by_alias=True, exclude_none=True)
