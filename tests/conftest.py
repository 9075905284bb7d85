"""
Shared test configuration for SiteProfile.

Provides parsed-document factories, a realistic business page, and
configuration fixtures with proper isolation between tests.
"""

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio

from siteprofile.config.config import Config, FetcherConfig, LazyConfig
from siteprofile.crawler.http_client import HttpClient
from siteprofile.extractor.document import SoupDocument

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests across the fetch, extract and serve layers")


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_lazy_config():
    """Make every test start without a cached global configuration."""
    LazyConfig.reset()
    yield
    LazyConfig.reset()


@pytest.fixture
def config() -> Config:
    """Default configuration with a short fetch timeout."""
    return Config(fetcher=FetcherConfig(timeout=5))


@pytest_asyncio.fixture
async def http_client(config: Config) -> AsyncGenerator[HttpClient, None]:
    """An initialized HTTP client that is closed after the test."""
    client = HttpClient(config)
    await client.initialize()
    yield client
    await client.close()


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def make_doc() -> Callable[[str], SoupDocument]:
    """Factory turning an HTML string into a parsed document."""

    def _make(html: str) -> SoupDocument:
        return SoupDocument(html)

    return _make


SAMPLE_BUSINESS_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>Acme Hardware Store</title>
  <meta name="description" content="Shop tools and buy hardware online. Add to cart today.">
  <meta name="keywords" content="tools, hardware">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta property="og:title" content="Acme Hardware">
  <meta property="og:image" content="">
  <meta name="twitter:card" content="summary">
  <meta name="generator" content="WordPress 6.4">
  <link rel="canonical" href="https://acme.test">
  <link rel="stylesheet" href="/css/bootstrap.min.css">
  <script src="https://code.jquery.com/jquery-3.7.1.min.js"></script>
  <script>window.dataLayer = []; function gtag(){dataLayer.push(arguments);}</script>
  <style>@media (max-width: 600px) { .grid { display: grid; } }</style>
</head>
<body>
  <header>
    <nav>
      <a href="/">Home</a>
      <a href="/products">Products</a>
      <a href="https://acme.test/about">About</a>
      <a href="#">  </a>
    </nav>
  </header>
  <main id="main">
    <p>Acme sells quality tools.</p>
    <div class="services">
      <h3>Key cutting</h3>
      <h3>Tool repair</h3>
      <h3>Key cutting</h3>
    </div>
    <div class="product-card"><h3>Hammer</h3><span class="price">$12.99</span></div>
    <div class="product-card"><h3>Wrench</h3></div>
    <div class="faq-item"><h4>Do you deliver?</h4><p>Yes, within 20 miles.</p></div>
    <img src="/img/store.jpg" alt="Storefront">
    <img src="/img/logo.png">
    <form id="newsletter"><input type="email" name="email"><button>Join</button></form>
  </main>
  <footer>
    <address>123 Main Street, Springfield</address>
    <p>Email: sales@acme.test</p>
    <a href="tel:+15551234567">Call us</a>
    <a href="https://www.facebook.com/acme">Facebook</a>
    <a href="/privacy-policy">Privacy</a>
    <a href="/terms">Terms of Service</a>
  </footer>
</body>
</html>
"""


@pytest.fixture
def sample_html() -> str:
    """A small but complete business homepage."""
    return SAMPLE_BUSINESS_HTML


@pytest.fixture
def sample_doc(sample_html: str) -> SoupDocument:
    return SoupDocument(sample_html)
