from typing import Dict, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from extractor_config import LOG_LEVEL
from logger import setup_logger
from models.models import Contact, ContactSubmission, ContactValidationError, Sender
from signature_extractor import default_extractor, html_to_text

logger = setup_logger("signature_api", LOG_LEVEL)


# -------------------------------
# Pydantic models for API input
# -------------------------------
class ExtractRequest(BaseModel):
    body: str
    sender: Sender = Field(default_factory=Sender)
    content_type: Literal["text", "html"] = Field(default="text", description="Format of `body`")


class ParseSignatureRequest(BaseModel):
    signature: str = Field(..., description="Pasted signature block")
    from_header: str = Field(default="", description='Optional "Display Name <email>" used for the name fallback')


class SubmissionRequest(BaseModel):
    contact: Dict[str, Optional[str]]
    added_by: str = Field(..., description="Identity of the user saving the contact")
    raw_signature: str = ""


# -------------------------------
# FastAPI app
# -------------------------------
app = FastAPI(title="Signature Contact Extractor")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
extractor = default_extractor


@app.post("/extract")
async def extract_contacts(request: ExtractRequest):
    body = html_to_text(request.body) if request.content_type == "html" else request.body
    errors = []
    contacts = extractor.process_email_content(body, request.sender, on_error=errors.append)
    if errors:
        raise HTTPException(status_code=500, detail="Error processing email content")
    return {
        "count": len(contacts),
        "contacts": [c.model_dump() for c in contacts],
    }


@app.post("/parse-signature")
async def parse_signature(request: ParseSignatureRequest):
    if not request.signature.strip():
        raise HTTPException(status_code=422, detail="Please paste a signature before extracting")
    try:
        contact = extractor.parse_signature(request.signature.strip(), request.from_header)
    except Exception as e:
        logger.exception("Error processing signature")
        raise HTTPException(status_code=500, detail=str(e))
    return {"found": contact.has_contact_info, "contact": contact.model_dump()}


@app.post("/contacts/submission")
async def build_submission(request: SubmissionRequest):
    try:
        edited = Contact(raw_signature=request.raw_signature).with_edits(
            request.contact, normalize_phone=extractor.normalize_phone
        )
    except ContactValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ContactSubmission.for_contact(edited, added_by=request.added_by).to_payload()


@app.get("/ping")
async def ping():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

# uvicorn api:app --reload
