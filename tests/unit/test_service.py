"""
Tests for the fetch-extract-merge service.
"""

import pytest
from aioresponses import aioresponses
from prometheus_client import REGISTRY

from siteprofile.config.config import Config, FetcherConfig
from siteprofile.exceptions import FetchError, InputError
from siteprofile.service import BusinessProfileService, extract_business_profile, validate_url

URL = "https://acme.test/shop"
INDEX_URL = "https://acme.test/shop/index.html"

INDEX_HTML = """<html><head><title>Acme Index</title></head>
<body><a href="tel:5559876543">Call the shop</a><a href="https://twitter.com/acme">Twitter</a></body></html>"""


def _sample(name: str, labels=None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.fixture
def service(config) -> BusinessProfileService:
    return BusinessProfileService(config)


@pytest.mark.unit
class TestValidateUrl:
    """Tests for request URL validation."""

    def test_accepts_http_and_https(self):
        assert validate_url("https://acme.test") == "https://acme.test"
        assert validate_url("  http://acme.test/a  ") == "http://acme.test/a"

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_missing(self, url):
        with pytest.raises(InputError, match="URL is required"):
            validate_url(url)

    @pytest.mark.parametrize("url", ["ftp://acme.test/file", "not a url", "https://", "acme.test"])
    def test_invalid(self, url):
        with pytest.raises(InputError, match="Invalid URL"):
            validate_url(url)


@pytest.mark.unit
class TestBusinessProfileService:
    """Behavioral tests for BusinessProfileService."""

    @pytest.mark.asyncio
    async def test_primary_and_index_merged(self, service, sample_html):
        before = _sample("siteprofile_requests_total", {"outcome": "success"})
        with aioresponses() as m:
            m.get(URL, status=200, body=sample_html, headers={"Server": "nginx"})
            m.get(INDEX_URL, status=200, body=INDEX_HTML)

            record = await service.extract_business_profile(URL)

        assert record.website_title == "Acme Hardware Store"
        assert record.phone == "5559876543"
        assert record.email == "sales@acme.test"
        assert record.social_media == ["https://www.facebook.com/acme", "https://twitter.com/acme"]
        assert record.security.has_https is True
        assert "Server: nginx" in record.technologies
        assert _sample("siteprofile_requests_total", {"outcome": "success"}) == before + 1

    @pytest.mark.asyncio
    async def test_missing_index_falls_back_to_primary(self, service, sample_html):
        before = _sample("siteprofile_index_fallback_total")
        with aioresponses() as m:
            m.get(URL, status=200, body=sample_html)
            m.get(INDEX_URL, status=404)

            record = await service.extract_business_profile(URL)

        assert record.phone == "+15551234567"
        assert record.social_media == ["https://www.facebook.com/acme"]
        assert _sample("siteprofile_index_fallback_total") == before + 1

    @pytest.mark.asyncio
    async def test_trailing_slash_skips_index(self, service, sample_html):
        with aioresponses() as m:
            m.get("https://acme.test/", status=200, body=sample_html)

            record = await service.extract_business_profile("https://acme.test/")

            assert len(m.requests) == 1
        assert record.business_type == "E-commerce"

    @pytest.mark.asyncio
    async def test_index_fetch_can_be_disabled(self, sample_html):
        service = BusinessProfileService(Config(fetcher=FetcherConfig(timeout=5, fetch_index_page=False)))
        with aioresponses() as m:
            m.get(URL, status=200, body=sample_html)

            await service.extract_business_profile(URL)

            assert len(m.requests) == 1

    @pytest.mark.asyncio
    async def test_primary_failure_raises(self, service):
        before = _sample("siteprofile_requests_total", {"outcome": "fetch_error"})
        with aioresponses() as m:
            m.get(URL, status=500)

            with pytest.raises(FetchError, match="status code 500") as exc_info:
                await service.extract_business_profile(URL)

        assert exc_info.value.status == 500
        assert _sample("siteprofile_requests_total", {"outcome": "fetch_error"}) == before + 1

    @pytest.mark.asyncio
    async def test_invalid_input_never_fetches(self, service):
        before = _sample("siteprofile_requests_total", {"outcome": "invalid_input"})
        with aioresponses() as m:
            with pytest.raises(InputError):
                await service.extract_business_profile("ftp://acme.test")

            assert len(m.requests) == 0
        assert _sample("siteprofile_requests_total", {"outcome": "invalid_input"}) == before + 1

    @pytest.mark.asyncio
    async def test_injected_client_is_reused(self, config, http_client):
        service = BusinessProfileService(config, client=http_client)
        with aioresponses() as m:
            m.get("https://acme.test/", status=200, body="<title>Reused</title>", repeat=True)

            first = await service.extract_business_profile("https://acme.test/")
            second = await service.extract_business_profile("https://acme.test/")

        assert first.website_title == second.website_title == "Reused"
        assert http_client.session is not None

    @pytest.mark.asyncio
    async def test_module_level_helper(self, config):
        with aioresponses() as m:
            m.get("https://acme.test/", status=200, body='<a href="mailto:hello@acme.test">Mail</a>')

            record = await extract_business_profile("https://acme.test/", config=config)

        assert record.email == "hello@acme.test"
        assert record.business_type == "Unknown"
