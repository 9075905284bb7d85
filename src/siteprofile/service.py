"""
Business profile service: fetch, extract, merge.

This is the boundary operation shared by the web API and the CLI. Only
InputError and FetchError escape it.
"""

from __future__ import annotations

import asyncio
import functools
import time
from typing import Optional
from urllib.parse import urlparse

import structlog

from siteprofile.config.config import Config, load_config
from siteprofile.crawler.http_client import FetchedPage, HttpClient
from siteprofile.exceptions import FetchError, InputError
from siteprofile.extractor.engine import ProfileExtractor, derive_index_url
from siteprofile.extractor.models import ExtractionRecord
from siteprofile.observability.metrics import METRICS

logger = structlog.get_logger(__name__)


def validate_url(url: Optional[str]) -> str:
    """Return the trimmed URL or raise InputError if it is not absolute http(s)."""
    if not isinstance(url, str) or not url.strip():
        raise InputError("URL is required")
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        raise InputError(f"Invalid URL: {url}")
    return url


class BusinessProfileService:
    """Coordinates page fetching and profile extraction for one URL at a time."""

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        client: Optional[HttpClient] = None,
        extractor: Optional[ProfileExtractor] = None,
    ) -> None:
        self.config = config or load_config()
        self._client = client
        self.extractor = extractor or ProfileExtractor()

    async def extract_business_profile(self, url: str) -> ExtractionRecord:
        """
        Fetch ``url`` (and its index page when derivable) and extract a profile.

        Raises:
            InputError: if the URL is missing or not http(s).
            FetchError: if the primary page cannot be fetched.
        """
        try:
            url = validate_url(url)
        except InputError:
            METRICS["requests_total"].labels(outcome="invalid_input").inc()
            raise

        try:
            if self._client is not None:
                record = await self._run(self._client, url)
            else:
                async with HttpClient(self.config) as client:
                    record = await self._run(client, url)
        except FetchError as e:
            METRICS["requests_total"].labels(outcome="fetch_error").inc()
            logger.warning("Primary page fetch failed", url=url, status=e.status, error=str(e))
            raise

        METRICS["requests_total"].labels(outcome="success").inc()
        return record

    async def _run(self, client: HttpClient, url: str) -> ExtractionRecord:
        primary = await client.fetch(url, page="primary")
        index = await self._fetch_index(client, url)

        start_time = time.time()
        loop = asyncio.get_running_loop()
        record = await loop.run_in_executor(
            None,
            functools.partial(
                self.extractor.extract,
                primary.text,
                primary.headers,
                index.text if index is not None else None,
                url,
            ),
        )
        METRICS["extraction_seconds"].observe(time.time() - start_time)

        logger.info(
            "Business profile extracted",
            url=url,
            business_type=record.business_type,
            index_page=index is not None,
        )
        return record

    async def _fetch_index(self, client: HttpClient, url: str) -> Optional[FetchedPage]:
        if not self.config.fetcher.fetch_index_page:
            return None
        index_url = derive_index_url(url)
        if index_url is None:
            return None
        try:
            return await client.fetch(index_url, page="index")
        except FetchError as e:
            # The primary page stands in for the index page
            METRICS["index_fallback_total"].inc()
            logger.debug("Index page unavailable", index_url=index_url, error=str(e))
            return None


async def extract_business_profile(url: str, config: Optional[Config] = None) -> ExtractionRecord:
    """Extract a business profile for ``url`` with a one-off service instance."""
    return await BusinessProfileService(config).extract_business_profile(url)
