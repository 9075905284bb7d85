"""
Exception hierarchy for profile extraction.
"""

from __future__ import annotations

from typing import Optional


class ProfileError(Exception):
    """Base exception for business profile extraction."""
    pass


class InputError(ProfileError):
    """Raised when the requested URL is missing or unusable."""
    pass


class FetchError(ProfileError):
    """Raised when the primary page cannot be retrieved."""

    def __init__(self, message: str, *, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
