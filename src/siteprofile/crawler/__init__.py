"""
Page fetching for profile extraction.
"""

from .http_client import FetchedPage, HttpClient

__all__ = ["HttpClient", "FetchedPage"]
