"""
Unit tests for SEO metadata and technology detection.
"""

import pytest

from siteprofile.extractor.seo import TECHNOLOGY_PROBES, detect_technologies, extract_seo_info


@pytest.mark.unit
class TestSEOInfo:
    """Tests for the SEO block."""

    def test_sample_page(self, sample_doc):
        seo = extract_seo_info(sample_doc)

        assert seo.title == "Acme Hardware Store"
        assert seo.meta_description == "Shop tools and buy hardware online. Add to cart today."
        assert seo.meta_keywords == "tools, hardware"
        assert seo.canonical_url == "https://acme.test"
        assert seo.headings.h1 == 0
        assert seo.headings.h3 == 5
        assert seo.img_alt_tags == 1
        assert seo.img_missing_alt == 1

    def test_social_card_tags_skip_empty_content(self, sample_doc):
        seo = extract_seo_info(sample_doc)
        assert seo.og_tags == {"title": "Acme Hardware"}
        assert seo.twitter_tags == {"card": "summary"}

    def test_alt_counts(self, make_doc):
        html = "".join('<img src="a.png" alt="x">' for _ in range(9)) + "".join('<img src="b.png">' for _ in range(3))
        seo = extract_seo_info(make_doc(html))
        assert seo.img_alt_tags == 9
        assert seo.img_missing_alt == 3

    def test_empty_page(self, make_doc):
        seo = extract_seo_info(make_doc(""))
        assert seo.title == ""
        assert seo.og_tags == {}
        assert seo.headings.h1 == 0


@pytest.mark.unit
class TestTechnologyDetection:
    """Tests for the ordered technology probe table."""

    def test_sample_page_with_headers(self, sample_doc):
        technologies = detect_technologies(sample_doc, {"server": "nginx", "x-powered-by": "PHP/8.2"})
        assert technologies == [
            "jQuery",
            "Bootstrap",
            "Google Analytics",
            "WordPress",
            "Server: nginx",
            "Powered by: PHP/8.2",
        ]

    def test_labels_are_unique(self, make_doc):
        doc = make_doc('<script src="/jquery.js"></script><script src="/jquery-ui.js"></script>')
        assert detect_technologies(doc) == ["jQuery"]

    def test_inline_pixel_and_wix(self, make_doc):
        doc = make_doc(
            '<meta name="generator" content="Wix.com Website Builder">'
            "<script>fbq('init', '123');</script>"
        )
        assert detect_technologies(doc) == ["Facebook Pixel", "Wix"]

    def test_wordpress_api_link(self, make_doc):
        doc = make_doc('<link rel="https://api.w.org/" href="https://acme.test/wp-json/">')
        assert detect_technologies(doc) == ["WordPress"]

    def test_no_headers_no_server_label(self, make_doc):
        assert detect_technologies(make_doc("<p>plain</p>"), None) == []

    def test_probe_order_is_fixed(self):
        names = [name for name, _ in TECHNOLOGY_PROBES]
        assert names.index("jquery") < names.index("wordpress") < names.index("server")
