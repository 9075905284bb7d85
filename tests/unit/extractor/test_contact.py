"""
Unit tests for the contact field extractors.
"""

import re

import pytest

from siteprofile.extractor.contact import (
    detect_languages,
    extract_address,
    extract_contact_info,
    extract_email,
    extract_phone,
    extract_social_media,
    has_privacy_policy,
    has_terms_of_service,
    normalize_phone,
)

PHONE_SHAPE = re.compile(r"^\+?[0-9]+$")


@pytest.mark.unit
class TestPhoneExtraction:
    """Tests for phone normalization and the pattern priority chain."""

    def test_normalize_keeps_leading_plus(self):
        assert normalize_phone("+1 (415) 555-0123") == "+14155550123"
        assert normalize_phone("(415) 555-0123") == "4155550123"

    def test_normalize_is_idempotent(self):
        for raw in ["+44 20 7946 0958", "415.555.0123", " 555 123 4567 "]:
            once = normalize_phone(raw)
            assert normalize_phone(once) == once

    def test_tel_link_wins_over_other_numbers(self, make_doc):
        doc = make_doc('<p>Ref 1234567890</p><a href="tel:+14155550123">Call</a>')
        assert extract_phone(doc) == "+14155550123"

    def test_short_tel_target_falls_through_to_formatted_number(self, make_doc):
        doc = make_doc('<a href="tel:123">x</a><p>Call 415-555-0123</p>')
        assert extract_phone(doc) == "4155550123"

    def test_visible_text_fallback(self, make_doc):
        doc = make_doc("<p>Tel 12 34 56 78</p>")
        assert extract_phone(doc) == "12345678"

    def test_no_phone(self, make_doc):
        assert extract_phone(make_doc("<p>hello world</p>")) == ""

    def test_output_shape(self, make_doc, sample_doc):
        for doc in [sample_doc, make_doc("<p>+1-800-555-0199</p>"), make_doc("<div>no digits</div>")]:
            phone = extract_phone(doc)
            if phone:
                assert PHONE_SHAPE.match(phone)
                assert len(phone) >= 8

    @pytest.mark.parametrize(
        "html",
        [
            "<p>هاتف ٠١٢٣٤٥٦٧٨٩</p>",
            "<p>Tel ０１２３４５６７８９</p>",
            "<p>تلفن ۰۹۱۲۳۴۵۶۷۸۹</p>",
        ],
    )
    def test_non_ascii_digits_are_not_phone_numbers(self, make_doc, html):
        assert extract_phone(make_doc(html)) == ""

    def test_ascii_number_on_arabic_page(self, make_doc):
        phone = extract_phone(make_doc("<p>هاتف ٠١٢ 415-555-0123</p>"))
        assert phone == "4155550123"
        assert PHONE_SHAPE.match(phone)

    def test_normalize_drops_non_ascii_digits(self):
        assert normalize_phone("+٠١٢ 415 555 0123") == "+4155550123"
        assert normalize_phone("０１２３４５６７８９") == ""


@pytest.mark.unit
class TestEmailExtraction:
    """Tests for email discovery."""

    def test_markup_address_preferred_over_mailto(self, make_doc):
        doc = make_doc('<p>Write to sales@acme.test</p><a href="mailto:info@localhost">x</a>')
        assert extract_email(doc) == "sales@acme.test"

    def test_mailto_fallback_strips_query(self, make_doc):
        doc = make_doc('<a href="mailto:info@localhost?subject=Hello">Email</a>')
        assert extract_email(doc) == "info@localhost"

    def test_mailto_only(self, make_doc):
        doc = make_doc('<html><body><a href="mailto:info@acme.test">Email us</a></body></html>')
        assert extract_email(doc) == "info@acme.test"

    def test_no_email(self, make_doc):
        assert extract_email(make_doc("<p>nothing</p>")) == ""


@pytest.mark.unit
class TestAddressExtraction:
    """Tests for the address selector chain."""

    def test_short_matches_are_skipped(self, make_doc):
        doc = make_doc('<address>Short</address><div class="address">42 Long Avenue, Townsville</div>')
        assert extract_address(doc) == "42 Long Avenue, Townsville"

    def test_itemprop_address(self, make_doc):
        doc = make_doc('<span itemprop="address"> 9 Harbour Road, Portville </span>')
        assert extract_address(doc) == "9 Harbour Road, Portville"

    def test_no_address(self, make_doc):
        assert extract_address(make_doc("<p>x</p>")) == ""


@pytest.mark.unit
class TestSocialMedia:
    """Tests for social profile discovery."""

    HTML = """
    <a href="https://facebook.com/acme">f</a>
    <a href="//twitter.com/acme">t</a>
    <a href="/redirect?to=github.com/acme">g</a>
    <a href="https://facebook.com/acme">again</a>
    <a class="social-icon" href="https://mastodon.social/@acme">m</a>
    <a class="social-icon" href="#share">share</a>
    <a class="social-icon" href="/local/path">local</a>
    <a aria-label="Facebook" href="https://facebook.com/acme">icon</a>
    """

    def test_normalized_and_deduplicated(self, make_doc):
        links = extract_social_media(make_doc(self.HTML))
        assert links == [
            "https://facebook.com/acme",
            "https://twitter.com/acme",
            "https://github.com/redirect?to=github.com/acme",
            "https://mastodon.social/@acme",
        ]

    def test_every_link_is_absolute_and_unique(self, make_doc):
        links = extract_social_media(make_doc(self.HTML))
        assert len(links) == len(set(links))
        assert all(link.startswith("http") for link in links)

    def test_no_social_links(self, make_doc):
        assert extract_social_media(make_doc('<a href="/about">About</a>')) == []


@pytest.mark.unit
class TestContactInfo:
    """Tests for the contact block built from contact containers."""

    def test_keys_filled_across_containers(self, make_doc):
        doc = make_doc(
            """
            <div id="contact"><p>Reach us at hello@acme.test</p><address>1 Infinite Loop, Cupertino</address></div>
            <footer><p>Call 555-123-4567</p><span class="hours">Mon-Fri 9-5</span><p>other@acme.test</p></footer>
            """
        )
        assert extract_contact_info(doc) == {
            "email": "hello@acme.test",
            "address": "1 Infinite Loop, Cupertino",
            "phone": "555-123-4567",
            "hours": "Mon-Fri 9-5",
        }

    def test_phone_requires_ascii_digits(self, make_doc):
        doc = make_doc('<div class="contact"><p>اتصل ٠١٢٣٤٥٦٧٨٩</p><p>hello@acme.test</p></div>')
        assert extract_contact_info(doc) == {"email": "hello@acme.test"}

    def test_no_contact_containers(self, make_doc):
        assert extract_contact_info(make_doc("<div>hello@acme.test</div>")) == {}


@pytest.mark.unit
class TestPolicyAndLanguages:
    """Tests for policy link flags and language detection."""

    def test_policy_matched_by_text_or_href(self, make_doc):
        doc = make_doc('<a href="/legal">Privacy Notice</a><a href="/TERMS.html">Legal</a>')
        assert has_privacy_policy(doc) is True
        assert has_terms_of_service(doc) is True

    def test_no_policy_links(self, make_doc):
        doc = make_doc('<a href="/about">About</a>')
        assert has_privacy_policy(doc) is False
        assert has_terms_of_service(doc) is False

    def test_languages(self, make_doc):
        doc = make_doc(
            """<html lang="en-US"><body><div class="language-switcher">
            <a hreflang="fr" href="/fr">Francais</a>
            <a href="/de">Deutsch</a>
            <a href="/es">ES</a>
            <a hreflang="en-US" href="/">English</a>
            </div></body></html>"""
        )
        assert detect_languages(doc) == ["en-US", "fr", "ES"]

    def test_no_languages(self, make_doc):
        assert detect_languages(make_doc("<p>x</p>")) == []
