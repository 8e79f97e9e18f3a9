"""Tests for phone normalization, title casing and the company-website policy."""

import pytest

from extractor_config import ExtractorConfig
from signature_extractor import SignatureExtractor


@pytest.fixture
def extractor():
    return SignatureExtractor(ExtractorConfig())


class TestNormalizePhone:
    def test_local_number_gets_default_country_code(self, extractor):
        assert extractor.normalize_phone("050-123-4567") == "+971501234567"

    def test_international_number_only_loses_separators(self, extractor):
        assert extractor.normalize_phone("+1 650 555 1234") == "+16505551234"

    def test_parentheses_and_spaces(self, extractor):
        assert extractor.normalize_phone("(04) 123 4567") == "+97141234567"

    def test_leading_text_before_plus_is_ignored(self, extractor):
        assert extractor.normalize_phone("Tel: +971 50 123 4567") == "+971501234567"
        assert extractor.normalize_phone("(+971) 50 123 4567") == "+971501234567"

    def test_double_zero_prefix_is_international(self, extractor):
        assert extractor.normalize_phone("00 44 20 7946 0958") == "+442079460958"

    def test_empty(self, extractor):
        assert extractor.normalize_phone("") == ""
        assert extractor.normalize_phone(None) == ""

    def test_custom_country_code(self):
        uk = SignatureExtractor(ExtractorConfig(default_country_code="+44"))
        assert uk.normalize_phone("020 7946 0958") == "+442079460958"

    def test_result_is_plus_and_digits(self, extractor):
        out = extractor.normalize_phone("Tel. (050) 123-4567 ")
        assert out.startswith("+")
        assert out[1:].isdigit()


class TestToTitleCase:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("acme", "Acme"),
            ("ACME corp", "Acme Corp"),
            ("initech-systems", "Initech-Systems"),
            ("3com", "3Com"),
            ("", ""),
        ],
    )
    def test_title_case(self, raw, expected):
        assert SignatureExtractor.to_title_case(raw) == expected


class TestIsCompanyWebsite:
    def test_company_urls(self, extractor):
        assert extractor.is_company_website("https://www.acme.com") is True
        assert extractor.is_company_website("acme.com") is True

    def test_excluded_platforms(self, extractor):
        assert extractor.is_company_website("https://calendly.com/john") is False
        assert extractor.is_company_website("https://bit.ly/abc") is False
        assert extractor.is_company_website("https://www.linkedin.com/in/john") is False

    def test_non_company_domains(self, extractor):
        assert extractor.is_company_website("https://www.google.com/maps") is False
        assert extractor.is_company_website("https://mail.yahoo.com") is False

    def test_single_label_host(self, extractor):
        assert extractor.is_company_website("http://localhost") is False

    def test_malformed_url_is_rejected_not_raised(self, extractor):
        assert extractor.is_company_website("http://[::1") is False
        assert extractor.is_company_website("") is False
        assert extractor.is_company_website(None) is False


class TestDomainPolicy:
    def test_lists_are_exposed(self, extractor):
        assert "calendly.com" in extractor.excluded_domains
        assert "dropbox.com" in extractor.non_company_domains
        assert "gmail.com" in extractor.common_email_providers
        assert "google.com" not in extractor.common_email_providers
