# signature_extractor.py
from __future__ import annotations

import logging
import re
from typing import Callable, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlparse

import html2text
from bs4 import BeautifulSoup

from extractor_config import ExtractorConfig, load_config
from models.models import Contact, Sender


logger = logging.getLogger(__name__)

IMAGE_PLACEHOLDER_RE = re.compile(r"\[.*?image.*?\]", re.IGNORECASE)
BLANK_RUN_RE = re.compile(r"\r?\n{2,}")
EMPHASIS_RE = re.compile(r"\*+")

# quoted-reply / forward markers that start a new message block
MESSAGE_SPLIT_RE = re.compile(
    r"\nOn .* wrote:|\n---|\n______|\nFrom:|\nSent:|\n> |\n\*|\nReply|\nForward",
    re.IGNORECASE,
)

# Latin, Arabic and CJK letters; everything else is ignored for the ratio
SCRIPT_CHARS_RE = re.compile(r"[^a-zA-Z\u0600-\u06FF\u4e00-\u9fff\u3400-\u4dbf]")
LATIN_RE = re.compile(r"[a-zA-Z]")
HEADER_NAME_RE = re.compile(r'^"?([^"<>]+)"?\s*<')
ALPHA_RUN_RE = re.compile(r"[^\W\d_]+")


class SignatureExtractor:
    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()

    # ---------- domain policy ----------
    @property
    def excluded_domains(self) -> Tuple[str, ...]:
        return self.config.excluded_domains

    @property
    def non_company_domains(self) -> Tuple[str, ...]:
        return self.config.non_company_domains

    @property
    def common_email_providers(self) -> Tuple[str, ...]:
        return self.config.common_email_providers

    def _has_excluded_domain(self, text: str) -> bool:
        low = text.lower()
        return any(d in low for d in self.excluded_domains)

    def is_company_website(self, url: str) -> bool:
        """
        True for URLs that plausibly point at the sender's company:
        not a meeting/social/shortener platform, not a consumer or big-tech
        domain, and a host with at least two labels.
        """
        if not isinstance(url, str) or not url.strip():
            return False
        url = url.strip()
        candidate = url if url.lower().startswith("http") else f"https://{url}"
        try:
            host = (urlparse(candidate).hostname or "").lower()
        except ValueError:
            return False
        if not host:
            return False
        if any(d in host for d in self.excluded_domains):
            return False
        if any(d in host for d in self.non_company_domains):
            return False
        labels = [p for p in host.split(".") if p]
        return len(labels) >= 2

    # ---------- text classifier ----------
    def is_english_text(self, text: str) -> bool:
        """
        Latin-ratio heuristic. Lines with no letters at all (phone numbers,
        separators) count as in-scope so they survive filtering.
        """
        if not isinstance(text, str) or not text:
            return False
        letters = SCRIPT_CHARS_RE.sub("", text)
        if not letters:
            return True
        latin = len(LATIN_RE.findall(letters))
        return latin / len(letters) > self.config.english_threshold

    # ---------- normalizers ----------
    def normalize_phone(self, number: str) -> str:
        """
        Digits only, '+' prefixed. Numbers written without '+' get the default
        country code after dropping a trunk '0'; a '00' prefix reads as '+'.
        """
        if not number:
            return ""
        cleaned = re.sub(r"[^\d+]", "", number)
        digits = re.sub(r"\D", "", cleaned)
        if not digits:
            return ""
        if cleaned.startswith("+"):
            return f"+{digits}"
        if digits.startswith("00"):
            return f"+{digits[2:]}"
        return self.config.default_country_code + digits.lstrip("0")

    @staticmethod
    def to_title_case(text: str) -> str:
        if not text:
            return ""
        return ALPHA_RUN_RE.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)

    # ---------- cleaning ----------
    @staticmethod
    def _clean_block(text: str, strip_emphasis: bool = False) -> str:
        text = IMAGE_PLACEHOLDER_RE.sub("", text)
        if strip_emphasis:
            text = EMPHASIS_RE.sub("", text)
        return BLANK_RUN_RE.sub("\n", text).strip()

    @staticmethod
    def _split_lines(text: str) -> List[str]:
        return [ln.strip() for ln in re.split(r"\r?\n", text) if ln.strip()]

    def _has_phone(self, line: str) -> bool:
        return self.config.phone_re.search(line) is not None

    def _has_url(self, line: str) -> bool:
        return self.config.url_re.search(line) is not None

    # ---------- segmentation ----------
    def extract_signatures_from_message(self, body: str) -> List[str]:
        """
        Split a raw body into message blocks and return one candidate
        signature per block that has enough in-scope lines.
        """
        if not isinstance(body, str) or not body:
            return []

        cfg = self.config
        cleaned = self._clean_block(body)
        signatures: List[str] = []

        for block in MESSAGE_SPLIT_RE.split(cleaned):
            lines = self._split_lines(block)
            english = [ln for ln in lines if self.is_english_text(ln)]
            if len(english) < cfg.min_english_lines:
                continue

            start = -1
            for i in range(len(english) - 1, -1, -1):
                low = english[i].lower()
                if any(ind in low for ind in cfg.signature_indicators):
                    start = i + 1
                    break
            if start == -1:
                start = max(0, len(english) - cfg.max_signature_lines)

            sig_lines = english[start:]
            if len(sig_lines) > 2:
                signatures.append("\n".join(sig_lines))

        kept = [s for s in signatures if len(s) > cfg.min_signature_length]
        logger.debug("Segmented body into %d candidate signature(s)", len(kept))
        return kept

    # ---------- components ----------
    def extract_email(self, lines: List[str]) -> str:
        for line in lines:
            m = self.config.email_re.search(line)
            if m:
                return m.group(0).lower()
        return ""

    def extract_phones(self, lines: List[str]) -> List[str]:
        phones: List[str] = []
        for line in lines:
            # fresh iterator per line; no match position carries over
            for m in self.config.phone_re.finditer(line):
                norm = self.normalize_phone(m.group(0))
                if norm:
                    phones.append(norm)
        return phones

    def extract_links(self, lines: List[str]) -> Tuple[str, str]:
        """Returns (website, linkedin); first accepted URL wins for each."""
        website, linkedin = "", ""
        for line in lines:
            for m in self.config.url_re.finditer(line):
                url = m.group(0).rstrip(">]")
                if url.lower().startswith("www."):
                    url = f"https://{url}"

                try:
                    host = (urlparse(url).hostname or "").lower()
                except ValueError:
                    continue

                if any(d in host for d in self.excluded_domains):
                    if not linkedin and "linkedin" in url.lower():
                        linkedin = url
                    continue

                if not website and self.is_company_website(url):
                    website = url
        return website, linkedin

    def _find_name(self, lines: List[str]) -> str:
        for line in lines:
            kind = next((k for k, rx in self.config.name_res if rx.match(line)), None)
            if kind is None:
                continue
            if "@" in line or self._has_phone(line) or self._has_url(line):
                continue
            if not self.is_english_text(line):
                continue
            logger.debug("Name %r matched %s pattern", line, kind)
            return line
        return ""

    def _name_from_header(self, from_header: str) -> str:
        if not from_header:
            return ""
        m = HEADER_NAME_RE.match(from_header)
        if not m:
            return ""
        name = m.group(1).strip()
        return name if self.is_english_text(name) else ""

    def _find_title(self, lines: List[str], contact_email: str, contact_phone: str, name: str) -> str:
        if name:
            # a name taken from the From header is not in the block; scan from the top
            start = lines.index(name) + 1 if name in lines else 0
            for line in lines[start:]:
                if line in (contact_email, contact_phone):
                    continue
                if self._has_url(line) or self._has_phone(line):
                    continue
                if self.is_english_text(line):
                    return line
            return ""

        for line in lines:
            if not self.config.title_re.search(line):
                continue
            if "@" in line or self._has_phone(line) or self._has_url(line):
                continue
            if self.is_english_text(line):
                return line
        return ""

    def _company_from_email(self, email_addr: str) -> str:
        if not email_addr or "@" not in email_addr:
            return ""
        domain = email_addr.split("@", 1)[1]
        if not domain or any(p in domain for p in self.common_email_providers):
            return ""
        return self.to_title_case(domain.split(".")[0])

    def extract_address(self, lines: List[str], taken: Tuple[str, ...]) -> str:
        address_lines = []
        for line in lines:
            if line in taken:
                continue
            if not (self.config.address_re.search(line) or re.search(r"\d", line)):
                continue
            if self._has_url(line):
                continue
            if not self.is_english_text(line):
                continue
            if self._has_excluded_domain(line):
                continue
            address_lines.append(line)
        return ", ".join(address_lines)

    # ---------- main ----------
    def parse_signature(self, signature: str, from_header: str = "") -> Contact:
        if signature is None or signature == "":
            return Contact()
        if not isinstance(signature, str):
            raise TypeError(f"signature must be str, got {type(signature).__name__}")

        lines = self._split_lines(self._clean_block(signature, strip_emphasis=True))

        email_addr = self.extract_email(lines)
        phones = self.extract_phones(lines)
        phone = phones[0] if phones else ""
        phone2 = phones[1] if len(phones) > 1 else ""
        website, linkedin = self.extract_links(lines)

        name = self._find_name(lines)
        if not name:
            name = self._name_from_header(from_header or "")

        title = self._find_title(lines, email_addr, phone, name)
        company = self._company_from_email(email_addr)
        address = self.extract_address(lines, tuple(v for v in (name, title, email_addr, phone) if v))

        return Contact(
            raw_signature=signature,
            company=company,
            name=name,
            title=title,
            email=email_addr,
            phone=phone,
            phone2=phone2,
            website=website,
            linkedin=linkedin,
            address=address,
        )

    def process_email_content(
        self,
        body: str,
        sender: Union[Sender, Mapping[str, str], None] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> List[Contact]:
        """
        Segment the body, parse every candidate and keep one contact per email
        address (first occurrence wins). Never raises.
        """
        try:
            if not isinstance(sender, Sender):
                sender = Sender(**(sender or {}))
            from_header = sender.as_header()
            signatures = self.extract_signatures_from_message(body)
            signatures = signatures[: self.config.max_signatures_per_email]

            contacts: List[Contact] = []
            seen = set()
            for sig in signatures:
                contact = self.parse_signature(sig, from_header)
                key = contact.email.lower()
                if not key or key in seen:
                    continue
                seen.add(key)
                contacts.append(contact)

            logger.info("Found %d contact signature(s)", len(contacts))
            return contacts
        except Exception as e:
            logger.exception("Error processing email content: %s", e)
            if on_error:
                on_error(e)
            return []


def html_to_text(raw_html: str) -> str:
    """
    Plain text for an HTML body. BeautifulSoup first; html2text only when the
    soup yields nothing.
    """
    if not raw_html:
        return ""
    soup = BeautifulSoup(raw_html, "html.parser")
    for tag in soup(["script", "style", "meta", "link", "head"]):
        tag.decompose()
    text = soup.get_text(separator="\n")
    if not text.strip():
        h = html2text.HTML2Text()
        h.ignore_links = True
        h.ignore_images = True
        h.ignore_emphasis = False
        text = h.handle(raw_html)
    return text


# module-level API bound to the process configuration
default_extractor = SignatureExtractor(load_config())

is_english_text = default_extractor.is_english_text
is_company_website = default_extractor.is_company_website
normalize_phone = default_extractor.normalize_phone
to_title_case = SignatureExtractor.to_title_case
extract_signatures_from_message = default_extractor.extract_signatures_from_message
parse_signature = default_extractor.parse_signature
process_email_content = default_extractor.process_email_content

excluded_domains = default_extractor.excluded_domains
non_company_domains = default_extractor.non_company_domains
common_email_providers = default_extractor.common_email_providers
