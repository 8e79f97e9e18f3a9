"""Tests for configuration defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from extractor_config import ExtractorConfig, load_config


def test_defaults():
    cfg = ExtractorConfig()
    assert cfg.default_country_code == "+971"
    assert cfg.english_threshold == 0.7
    assert cfg.min_signature_length == 20
    assert cfg.min_english_lines == 2
    assert cfg.max_signature_lines == 10
    assert "linkedin.com" in cfg.excluded_domains


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DEFAULT_COUNTRY_CODE", "+44")
    monkeypatch.setenv("ENGLISH_THRESHOLD", "0.8")
    monkeypatch.setenv("MAX_SIGNATURE_LINES", "6")
    cfg = load_config()
    assert cfg.default_country_code == "+44"
    assert cfg.english_threshold == 0.8
    assert cfg.max_signature_lines == 6
    assert cfg.min_english_lines == 2


def test_blank_env_value_keeps_default(monkeypatch):
    monkeypatch.setenv("MIN_SIGNATURE_LENGTH", "  ")
    assert load_config().min_signature_length == 20


def test_out_of_range_threshold_is_rejected(monkeypatch):
    monkeypatch.setenv("ENGLISH_THRESHOLD", "1.5")
    with pytest.raises(ValidationError):
        load_config()


def test_config_is_frozen():
    cfg = ExtractorConfig()
    with pytest.raises(ValidationError):
        cfg.min_english_lines = 5


def test_compiled_patterns():
    cfg = ExtractorConfig()
    assert cfg.email_re.search("Mail: John@Acme.COM").group(0) == "John@Acme.COM"
    assert cfg.title_re.search("Senior Engineer")
    assert not cfg.address_re.search("John Smith")
    assert [kind for kind, _ in cfg.name_res] == ["standard", "initial_surname", "first_initial", "three_words"]
