"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from api import app


@pytest.fixture
def client():
    return TestClient(app)


def test_ping(client):
    res = client.get("/ping")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


class TestExtractEndpoint:
    def test_text_body(self, client):
        res = client.post(
            "/extract",
            json={
                "body": "Hi team,\nThanks,\nJohn Smith\nCEO\njohn@acme.com\n+971501234567",
                "sender": {"name": "John Smith", "email": "john@acme.com"},
            },
        )
        assert res.status_code == 200
        data = res.json()
        assert data["count"] == 1
        assert data["contacts"][0]["email"] == "john@acme.com"
        assert data["contacts"][0]["phone"] == "+971501234567"
        assert data["contacts"][0]["company"] == "Acme"

    def test_html_body(self, client):
        html = "<div>Regards,</div><div>Jane Doe</div><div>COO</div><div>jane@initech.ae</div>"
        res = client.post("/extract", json={"body": html, "content_type": "html"})
        assert res.status_code == 200
        assert res.json()["contacts"][0]["name"] == "Jane Doe"

    def test_nothing_found(self, client):
        res = client.post("/extract", json={"body": "ok"})
        assert res.status_code == 200
        assert res.json() == {"count": 0, "contacts": []}


class TestParseSignatureEndpoint:
    def test_found(self, client):
        res = client.post("/parse-signature", json={"signature": "John Smith\nCEO\njohn@acme.com"})
        assert res.status_code == 200
        body = res.json()
        assert body["found"] is True
        assert body["contact"]["title"] == "CEO"

    def test_not_found(self, client):
        res = client.post("/parse-signature", json={"signature": "call me tomorrow, ok?"})
        assert res.status_code == 200
        assert res.json()["found"] is False

    def test_empty_signature(self, client):
        res = client.post("/parse-signature", json={"signature": "   "})
        assert res.status_code == 422


class TestSubmissionEndpoint:
    def test_payload(self, client):
        res = client.post(
            "/contacts/submission",
            json={"contact": {"name": "John Smith", "email": "JOHN@acme.com"}, "added_by": "me@acme.com"},
        )
        assert res.status_code == 200
        payload = res.json()
        assert payload["action"] == "saveContact"
        assert payload["addedBy"] == "me@acme.com"
        assert payload["contact"]["email"] == "john@acme.com"
        assert "timestamp" in payload

    def test_invalid_edit(self, client):
        res = client.post("/contacts/submission", json={"contact": {"notes": "x"}, "added_by": "me@acme.com"})
        assert res.status_code == 422
        assert res.json()["detail"] == "Please provide at least an email or name"
