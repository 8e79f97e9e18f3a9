# extractor_config.py
"""
Static configuration for the signature contact extractor.
- Defaults mirror the add-in configuration (UAE country code, 70% Latin ratio)
- Numeric thresholds and country code can be overridden from .env
- ExtractorConfig is frozen; build a new one instead of mutating
"""

from __future__ import annotations

import os
import re
from functools import cached_property
from typing import Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


EXCLUDED_DOMAINS = (
    # meeting platforms
    "calendly.com", "cal.com", "acuityscheduling.com", "booking.com",
    "scheduleonce.com", "doodle.com", "zoom.us", "teams.microsoft.com",
    "meet.google.com", "goto.com", "webex.com", "skype.com",
    # social networks
    "facebook.com", "instagram.com", "twitter.com", "x.com",
    "linkedin.com", "youtube.com", "tiktok.com", "snapchat.com",
    "pinterest.com", "whatsapp.com", "telegram.org", "discord.com",
    "reddit.com",
    # url shorteners
    "bit.ly", "tinyurl.com", "short.link", "ow.ly",
)

COMMON_EMAIL_PROVIDERS = (
    "gmail.com", "yahoo.com", "hotmail.com", "outlook.com", "icloud.com",
)

NON_COMPANY_DOMAINS = COMMON_EMAIL_PROVIDERS + (
    "google.com", "microsoft.com", "apple.com", "amazon.com", "dropbox.com",
)

SIGNATURE_INDICATORS = (
    "regards", "cheers", "thanks", "sincerely", "best",
    "kind regards", "yours", "respectfully",
)

ADDRESS_KEYWORDS = (
    "street", "st", "road", "rd", "avenue", "ave", "tower", "building",
    "floor", "suite", "po box", "p.o.", "dubai", "uae", "abu dhabi",
    "sharjah", "singapore", "city", "district",
)

TITLE_KEYWORDS = (
    "manager", "director", "president", "ceo", "cfo", "coo", "vice",
    "senior", "junior", "lead", "head", "chief", "officer", "analyst",
    "coordinator", "specialist", "engineer", "developer", "designer",
    "consultant", "advisor",
)

# (kind, pattern) evaluated in order, first match wins
NAME_PATTERNS = (
    ("standard", r"^[A-Z][a-z]+ [A-Z][a-z]+( [A-Z][a-z]+)*$"),
    ("initial_surname", r"^[A-Z]\. [A-Z][a-z]+$"),
    ("first_initial", r"^[A-Z][a-z]+ [A-Z]\.$"),
    ("three_words", r"^[A-Za-z]+ [A-Za-z]+ [A-Za-z]+$"),
)

SECTOR_OPTIONS = ("Government", "Semi-government", "Private")

INDUSTRY_OPTIONS = (
    "Accounting, Finance & Banking",
    "Agriculture, Food & Beverage",
    "Arts, Media & Entertainment",
    "Construction, Real Estate & Infrastructure",
    "Consulting, Legal & Professional Services",
    "Consumer Goods, Retail & Hospitality",
    "Education, Training & Non-Profit",
    "Energy, Utilities & Environmental Services",
    "Government, Public Policy & International Affairs",
    "Healthcare, Pharmaceuticals & Life Sciences",
    "Human Resources & Career Services",
    "Information Technology, Software & Digital Services",
    "Logistics, Transportation & Supply Chain",
    "Manufacturing & Industrial Engineering",
    "Marketing, Advertising & Communications",
    "Science, Research & Innovation",
    "Security, Defense & Aerospace",
    "Sports, Recreation & Wellness",
)


class ExtractorConfig(BaseModel):
    """Read-only settings shared by every extraction call."""

    model_config = ConfigDict(frozen=True)

    default_country_code: str = Field(default="+971", description="Prepended to numbers written without '+'")
    english_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    min_signature_length: int = Field(default=20, ge=0)
    min_english_lines: int = Field(default=2, ge=0)
    max_signature_lines: int = Field(default=10, ge=1)
    max_signatures_per_email: int = Field(default=20, ge=1)

    excluded_domains: Tuple[str, ...] = EXCLUDED_DOMAINS
    non_company_domains: Tuple[str, ...] = NON_COMPANY_DOMAINS
    common_email_providers: Tuple[str, ...] = COMMON_EMAIL_PROVIDERS
    signature_indicators: Tuple[str, ...] = SIGNATURE_INDICATORS
    address_keywords: Tuple[str, ...] = ADDRESS_KEYWORDS
    title_keywords: Tuple[str, ...] = TITLE_KEYWORDS
    name_patterns: Tuple[Tuple[str, str], ...] = NAME_PATTERNS
    sector_options: Tuple[str, ...] = SECTOR_OPTIONS
    industry_options: Tuple[str, ...] = INDUSTRY_OPTIONS

    email_pattern: str = r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b"
    phone_pattern: str = r"\+?\d[\d\s\-()]{6,}\d"
    url_pattern: str = r"https?://\S+|www\.\S+"

    # ---------- compiled patterns ----------
    # compiled objects are stateless; every scan gets its own finditer/search
    @cached_property
    def email_re(self) -> re.Pattern:
        return re.compile(self.email_pattern, re.IGNORECASE)

    @cached_property
    def phone_re(self) -> re.Pattern:
        return re.compile(self.phone_pattern)

    @cached_property
    def url_re(self) -> re.Pattern:
        return re.compile(self.url_pattern, re.IGNORECASE)

    @cached_property
    def address_re(self) -> re.Pattern:
        alternation = "|".join(re.escape(k) for k in self.address_keywords)
        return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)

    @cached_property
    def title_re(self) -> re.Pattern:
        alternation = "|".join(re.escape(k) for k in self.title_keywords)
        return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)

    @cached_property
    def name_res(self) -> Tuple[Tuple[str, re.Pattern], ...]:
        return tuple((kind, re.compile(pattern)) for kind, pattern in self.name_patterns)


def _env(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return cast(raw.strip())


def load_config() -> ExtractorConfig:
    """Build the process configuration from defaults plus .env / environment overrides."""
    defaults = ExtractorConfig()
    return ExtractorConfig(
        default_country_code=_env("DEFAULT_COUNTRY_CODE", str, defaults.default_country_code),
        english_threshold=_env("ENGLISH_THRESHOLD", float, defaults.english_threshold),
        min_signature_length=_env("MIN_SIGNATURE_LENGTH", int, defaults.min_signature_length),
        min_english_lines=_env("MIN_ENGLISH_LINES", int, defaults.min_english_lines),
        max_signature_lines=_env("MAX_SIGNATURE_LINES", int, defaults.max_signature_lines),
        max_signatures_per_email=_env("MAX_SIGNATURES_PER_EMAIL", int, defaults.max_signatures_per_email),
    )

