# service.py
"""
Contact extraction session.
- Runs the extractor over the open email and hands contacts to a renderer
- Parses a manually pasted signature and opens it for editing
- Applies the user's edits, submits the contact, then sends a notification
- Keeps no state between calls; the UI and the contact store are injected
"""

import logging
from typing import Iterable, Mapping, Optional, Protocol, Union

from models.models import Contact, ContactSubmission, ContactValidationError, Sender
from signature_extractor import SignatureExtractor, default_extractor, html_to_text

logger = logging.getLogger(__name__)


class ContactRenderer(Protocol):
    """UI side: contact cards, the empty state, messages and the edit form."""

    def render(self, contacts: Iterable[Contact]) -> None: ...

    def show_empty(self) -> None: ...

    def show_message(self, message: str, level: str = "success") -> None: ...

    def show_edit_form(self, contact: Contact) -> None: ...


class ContactSink(Protocol):
    """Remote contact store. Both calls receive the JSON-ready payload."""

    def submit(self, payload: dict) -> None: ...

    def notify(self, payload: dict) -> None: ...


class ContactExtractionService:
    def __init__(
        self,
        renderer: ContactRenderer,
        sink: ContactSink,
        added_by: str,
        extractor: Optional[SignatureExtractor] = None,
    ):
        self.renderer = renderer
        self.sink = sink
        self.added_by = added_by
        self.extractor = extractor or default_extractor

    # -------------------------
    # Email body
    # -------------------------
    def load_email(
        self,
        body: str,
        sender: Union[Sender, Mapping[str, str], None] = None,
        is_html: bool = False,
    ) -> list[Contact]:
        text = html_to_text(body) if is_html else body
        contacts = self.extractor.process_email_content(
            text, sender, on_error=lambda _e: self.renderer.show_message("Error processing email content", "error")
        )
        if contacts:
            self.renderer.render(contacts)
        else:
            self.renderer.show_empty()
        return contacts

    # -------------------------
    # Pasted signature
    # -------------------------
    def extract_manual(self, signature_text: str) -> Optional[Contact]:
        sig = (signature_text or "").strip()
        if not sig:
            self.renderer.show_message("Please paste a signature before extracting", "warning")
            return None

        contact = self.extractor.parse_signature(sig)
        if not contact.has_contact_info:
            self.renderer.show_message("No contact information found in the signature", "warning")
            return None

        self.renderer.show_edit_form(contact)
        return contact

    # -------------------------
    # Edit round trip
    # -------------------------
    def save_contact(self, contact: Contact, fields: Mapping[str, Optional[str]]) -> Optional[ContactSubmission]:
        """
        Apply edits, submit, notify.
        Returns the submission on success, None when the edit was rejected or the store failed.
        """
        try:
            edited = contact.with_edits(fields, normalize_phone=self.extractor.normalize_phone)
        except ContactValidationError as e:
            self.renderer.show_message(str(e), "error")
            return None

        submission = ContactSubmission.for_contact(edited, added_by=self.added_by)
        try:
            self.sink.submit(submission.to_payload())
        except Exception as e:
            logger.error("Save error: %s: %s", type(e).__name__, e)
            self.renderer.show_message("Failed to save contact. Please try again.", "error")
            return None

        self.renderer.show_message(f"Contact {edited.name or edited.email} saved successfully!", "success")

        try:
            self.sink.notify(submission.as_notification("added").to_payload())
        except Exception as e:
            logger.warning("Failed to send notification: %s: %s", type(e).__name__, e)

        return submission
