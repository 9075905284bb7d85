"""
SiteProfile - rule-based business profile extraction from websites.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .exceptions import FetchError, InputError, ProfileError
from .extractor import ExtractionRecord, ProfileExtractor
from .service import BusinessProfileService, extract_business_profile

__all__ = [
    "__version__",
    "Config",
    "BusinessProfileService",
    "extract_business_profile",
    "ProfileExtractor",
    "ExtractionRecord",
    "ProfileError",
    "InputError",
    "FetchError",
]
