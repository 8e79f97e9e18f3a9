# models.py
"""
pydantic models for extracted contacts and the payloads handed to the
contact-storage collaborator.

Contact fields are plain strings; an empty string means "not found".
Contacts are frozen: edits produce a new record via Contact.with_edits().
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from extractor_config import INDUSTRY_OPTIONS, SECTOR_OPTIONS, ExtractorConfig


EMAIL_RE = ExtractorConfig().email_re

EDITABLE_FIELDS = (
    "company", "sector", "industry", "name", "title", "email",
    "phone", "phone2", "website", "linkedin", "address", "notes",
)


class ContactValidationError(ValueError):
    """Raised when user-edited contact fields cannot be accepted."""


class Sender(BaseModel):
    name: str = ""
    email: str = ""

    def as_header(self) -> str:
        return f"{self.name} <{self.email}>"


class Contact(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_signature: str = ""
    company: str = ""
    sector: str = ""
    industry: str = ""
    name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    phone2: str = ""
    website: str = ""
    linkedin: str = ""
    address: str = ""
    notes: str = ""

    @property
    def has_contact_info(self) -> bool:
        return bool(self.email or self.name)

    def fields(self) -> Dict[str, str]:
        """Flat field map without the raw signature (what the storage side receives)."""
        return {f: getattr(self, f) for f in EDITABLE_FIELDS}

    def with_edits(
        self,
        edits: Mapping[str, Optional[str]],
        normalize_phone: Optional[Callable[[str], str]] = None,
    ) -> "Contact":
        """
        Replace every editable field from `edits` and validate the result.
        Missing keys become empty strings, unknown keys are rejected.
        """
        unknown = set(edits) - set(EDITABLE_FIELDS)
        if unknown:
            raise ContactValidationError(f"Unknown contact field(s): {', '.join(sorted(unknown))}")

        values = {f: (edits.get(f) or "").strip() for f in EDITABLE_FIELDS}
        values["email"] = values["email"].lower()
        if normalize_phone:
            values["phone"] = normalize_phone(values["phone"])
            values["phone2"] = normalize_phone(values["phone2"])

        if not values["email"] and not values["name"]:
            raise ContactValidationError("Please provide at least an email or name")
        if values["email"] and not EMAIL_RE.fullmatch(values["email"]):
            raise ContactValidationError("Please provide a valid email address")
        if values["sector"] and values["sector"] not in SECTOR_OPTIONS:
            raise ContactValidationError(f"Unknown sector: {values['sector']}")
        if values["industry"] and values["industry"] not in INDUSTRY_OPTIONS:
            raise ContactValidationError(f"Unknown industry: {values['industry']}")

        return Contact(raw_signature=self.raw_signature, **values)


class ContactSubmission(BaseModel):
    """
    Payload for the remote contact store.
    Serialized with camelCase keys (addedBy, actionType) as the store expects.
    """

    model_config = ConfigDict(populate_by_name=True)

    action: str = "saveContact"
    contact: Dict[str, str]
    added_by: str = Field(..., alias="addedBy")
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    action_type: Optional[str] = Field(default=None, alias="actionType")

    @classmethod
    def for_contact(cls, contact: Contact, added_by: str, timestamp: Optional[datetime] = None) -> "ContactSubmission":
        ts = (timestamp or datetime.now(timezone.utc)).isoformat()
        return cls(contact=contact.fields(), added_by=added_by, timestamp=ts)

    def as_notification(self, action_type: str = "added") -> "ContactSubmission":
        return self.model_copy(update={"action": "sendNotification", "action_type": action_type})

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
