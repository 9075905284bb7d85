"""
Pattern library for the field extractors.

Regexes, selector priority lists and keyword tables. Order is significant
everywhere: every list is consumed top to bottom and the first qualifying
entry wins.
"""

from __future__ import annotations

import re
from typing import Dict, List, Pattern, Tuple

# --- Contact patterns ---

EMAIL_PATTERN: Pattern[str] = re.compile(r"[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}")
MAILTO_SELECTOR = 'a[href^="mailto:"]'

# Raw-markup phone patterns in priority order: tel: targets, area-code
# formatted, loosely separated long runs, bare 10-digit runs. Digit classes
# are ASCII-only.
PHONE_PATTERNS: List[Pattern[str]] = [
    re.compile(r"""href=['"]tel:([0-9+]+)['"]""", re.IGNORECASE),
    re.compile(r"(\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}", re.ASCII),
    re.compile(r"(\+\d{1,3})?[-.\s]?\d{3,5}[-.\s]?\d{3}[-.\s]?\d{3,4}", re.ASCII),
    re.compile(r"\b\d{10}\b", re.ASCII),
]
TEL_TARGET_PATTERN: Pattern[str] = re.compile(r"tel:([0-9+]+)", re.IGNORECASE)
VISIBLE_PHONE_PATTERN: Pattern[str] = re.compile(r"\b(\+?[\d\s\-()]{8,15})\b", re.ASCII)
TEL_ANCHOR_PATTERN: Pattern[str] = re.compile(r"""<a[^>]*href=["']tel:([0-9+]+)["'][^>]*>""", re.IGNORECASE)
MIN_PHONE_DIGITS = 8

CONTACT_PHONE_PATTERN: Pattern[str] = re.compile(
    r"(\+\d{1,3}[-.\s]?)?(\(?\d{3}\)?[-.\s]?)?\d{3}[-.\s]?\d{4}", re.ASCII
)

ADDRESS_SELECTORS: List[str] = [
    "address",
    ".address",
    "#address",
    ".contact-address",
    ".location",
    "footer address",
    "footer .address",
    "div.address",
    '[itemprop="address"]',
]
MIN_ADDRESS_LENGTH = 10

CONTACT_SECTION_SELECTORS: List[str] = [
    "#contact",
    ".contact",
    ".contact-us",
    ".contact-info",
    "footer",
]
CONTACT_ADDRESS_SELECTOR = 'address, .address, [itemprop="address"]'
CONTACT_HOURS_SELECTOR = '.hours, .opening-hours, .business-hours, [itemprop="openingHours"]'

# --- Social media ---

SOCIAL_PLATFORMS: List[str] = [
    "facebook.com",
    "twitter.com",
    "instagram.com",
    "linkedin.com",
    "youtube.com",
    "pinterest.com",
    "tiktok.com",
    "snapchat.com",
    "reddit.com",
    "tumblr.com",
    "discord.gg",
    "medium.com",
    "github.com",
    "behance.net",
    "dribbble.com",
    "whatsapp.com",
    "telegram.org",
    "threads.net",
    "t.me",
]

SOCIAL_HINT_SELECTOR = ", ".join(
    [
        'a[class*="social"]',
        'a[class*="facebook"]',
        'a[class*="instagram"]',
        'a[class*="twitter"]',
        'a[class*="linkedin"]',
        'a[class*="youtube"]',
        '[aria-label*="Facebook"]',
        '[aria-label*="Instagram"]',
        '[aria-label*="Twitter"]',
        '[aria-label*="LinkedIn"]',
        '[aria-label*="YouTube"]',
    ]
)

# --- Business classification ---

BUSINESS_TYPES: List[Tuple[str, List[str]]] = [
    ("E-commerce", ["shop", "store", "buy", "purchase", "cart", "product"]),
    ("Blog", ["blog", "article", "post", "read", "news", "content"]),
    ("SaaS", ["software", "service", "platform", "solution", "cloud", "subscription"]),
    ("Local Business", ["local", "location", "hours", "visit", "store", "shop"]),
    ("Professional Service", ["service", "professional", "expert", "consultation", "appointment"]),
    ("Restaurant", ["food", "restaurant", "menu", "reservation", "dish", "eat"]),
    ("Educational", ["course", "learn", "education", "training", "school", "university"]),
]
UNKNOWN_BUSINESS_TYPE = "Unknown"
MIN_CATEGORY_HITS = 3
CLASSIFIER_BODY_CHARS = 1000

# --- Content ---

ABOUT_SELECTOR = "div.about, section.about, #about, .about-us, #about-us"
EXCERPT_CHARS = 1000

PRODUCT_SELECTORS: List[str] = [
    ".product",
    ".product-item",
    ".product-card",
    ".product-container",
    ".productItem",
    ".item-product",
    ".woocommerce-product",
    ".shopify-product",
    'div[itemtype="http://schema.org/Product"]',
    '[class*="product"]',
]
PRODUCT_NAME_SELECTOR = "h2, h3, h4, .product-title, .product-name, .title"
PRODUCT_PRICE_SELECTOR = '.price, .product-price, [class*="price"]'
MAX_PRODUCTS = 10

SERVICE_TITLE_SELECTORS: List[str] = [
    ".services .service h3",
    ".services .service-item h3",
    ".services .service-box h3",
    ".services .service-title",
    ".service-section h3",
    "#services h3",
    ".services h3",
    ".services h4",
    "section.services .title",
    '[class*="service"] h3',
]
SERVICE_LIST_SELECTORS: List[str] = [
    ".services li",
    "#services li",
    "section.services li",
    "div.service-list li",
]

FAQ_JSON_LD_SELECTOR = 'script[type="application/ld+json"]'
FAQ_CONTAINER_SELECTOR = '.faq-item, .accordion-item, .question-answer, [class*="faq"]'
FAQ_QUESTION_SELECTOR = ".question, .accordion-header, h3, h4"
FAQ_ANSWER_SELECTOR = ".answer, .accordion-content, .accordion-body, p"

# --- Forms ---

FORM_FIELD_SELECTOR = "input, select, textarea"

# --- Navigation ---

NAVIGATION_SELECTORS: List[str] = ["nav", "header ul", ".menu", "#menu", ".nav", ".navigation"]
MAX_MENU_ITEMS = 15
DROPDOWN_SELECTOR = "ul ul, .dropdown, .sub-menu"
MOBILE_MENU_SELECTOR = '.mobile-menu, .hamburger, [class*="mobile-nav"], [class*="menu-toggle"]'
BREADCRUMB_SELECTOR = '.breadcrumbs, .breadcrumb, [class*="breadcrumbs"], [class*="breadcrumb"]'

# --- Media ---

VIDEO_SELECTOR = 'video, iframe[src*="youtube"], iframe[src*="vimeo"]'
MAX_IMAGES = 10
MAX_VIDEOS = 5

# --- Page structure ---

PAGE_STRUCTURE_SELECTORS: Dict[str, str] = {
    "has_header": "header, #header, .header",
    "has_footer": "footer, #footer, .footer",
    "has_navigation": "nav, #nav, .nav, ul.menu",
    "has_slider": ".slider, .carousel, .slideshow",
    "has_sidebar": "aside, .sidebar, #sidebar",
    "has_cookie_banner": '#cookie-banner, .cookie-banner, div:-soup-contains("cookie")',
}

# --- Security / accessibility / mobile ---

CAPTCHA_SELECTOR = 'div.g-recaptcha, .recaptcha, [class*="captcha"]'
SKIP_LINK_SELECTOR = 'a[href^="#main"], a[href^="#content"], a:-soup-contains("Skip to")'
MOBILE_CLASS_SELECTOR = '[class*="mobile"], [class*="sm-"], [class*="md-"], [class*="lg-"]'
FLEX_STYLE_SELECTOR = '[style*="display: flex"], [style*="display:flex"]'
GRID_STYLE_SELECTOR = '[style*="display: grid"], [style*="display:grid"]'

# --- Languages ---

LANGUAGE_SWITCHER_SELECTOR = 'a[href*="lang="], .language-switcher a, .lang-switcher a, [class*="language"] a'
MAX_LANGUAGE_CODE_LENGTH = 5

NOT_SPECIFIED = "Not specified"
