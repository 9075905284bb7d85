"""
Async HTTP client for fetching the pages a profile is extracted from.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import aiohttp
import structlog

from siteprofile.config.config import Config, FetcherConfig
from siteprofile.exceptions import FetchError
from siteprofile.observability.metrics import METRICS

logger = structlog.get_logger(__name__)


@dataclass
class FetchedPage:
    """A successfully fetched page with lower-cased response headers."""

    url: str
    final_url: str
    status: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)
    elapsed: float = 0.0


class HttpClient:
    """
    Single-shot page fetcher.

    Sends a browser-like User-Agent, applies the configured total timeout and
    turns any transport error or non-2xx status into a FetchError. There are
    no retries; one request is one attempt.
    """

    def __init__(self, config: Config):
        self.config = config
        self.fetcher_config: FetcherConfig = config.fetcher
        self.session: Optional[aiohttp.ClientSession] = None
        self._is_initialized = False

    async def initialize(self) -> None:
        """Initialize the HTTP client session."""
        if self.session is None:
            timeout = aiohttp.ClientTimeout(total=self.fetcher_config.timeout)
            self.session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(ttl_dns_cache=30, enable_cleanup_closed=True),
                timeout=timeout,
                headers={"User-Agent": self.fetcher_config.user_agent},
            )
            self._is_initialized = True
            logger.debug("HTTP client session initialized", timeout=self.fetcher_config.timeout)

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        if self.session:
            await self.session.close()
            self.session = None
        self._is_initialized = False

    async def __aenter__(self) -> "HttpClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str, *, page: str = "primary") -> FetchedPage:
        """
        Fetch a page and decode its body.

        Args:
            url: Absolute http(s) URL.
            page: Label used for the latency histogram ("primary" or "index").

        Raises:
            FetchError: on connection failure, timeout or a non-2xx status.
        """
        if not self._is_initialized or self.session is None:
            raise RuntimeError("HTTP client not initialized. Call initialize() first.")

        start_time = time.time()
        try:
            async with self.session.get(url) as response:
                status = response.status
                if not 200 <= status < 300:
                    raise FetchError(f"Request failed with status code {status}", url=url, status=status)
                text = await response.text(errors="replace")
                headers = {name.lower(): value for name, value in response.headers.items()}
                final_url = str(response.url)
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request timed out after {self.fetcher_config.timeout}s", url=url) from e
        except aiohttp.ClientError as e:
            raise FetchError(str(e) or e.__class__.__name__, url=url) from e
        finally:
            METRICS["fetch_latency_seconds"].labels(page=page).observe(time.time() - start_time)

        elapsed = time.time() - start_time
        logger.debug("Page fetched", url=url, final_url=final_url, status=status, page=page, elapsed=elapsed)
        return FetchedPage(
            url=url,
            final_url=final_url,
            status=status,
            text=text,
            headers=headers,
            elapsed=elapsed,
        )
