"""Tests for inbound payload validation.

Tests the InboundEmail schema and parse_inbound_email error reporting.
"""

import json

import pytest

from ingestion.errors import PayloadValidationError
from ingestion.validation import parse_inbound_email


class TestParseInboundEmail:
    """Test parsing and validating webhook bodies."""

    def test_canonical_naming(self, postmark_payload):
        """Test a payload in the provider's field naming."""
        email = parse_inbound_email(json.dumps(postmark_payload))

        assert email.message_id == postmark_payload["MessageID"]
        assert email.subject == "Lunch on Friday?"
        assert email.sender == "alice@example.com"
        assert email.recipient == "inbox@example.com"
        assert email.body == "Are you free for lunch on Friday?"
        assert len(email.attachments) == 1
        assert email.attachments[0].name == "menu.pdf"
        assert email.attachments[0].content_length == 2048

    def test_lowercase_naming(self, simple_payload):
        """Test the alternate lowercase field naming."""
        email = parse_inbound_email(json.dumps(simple_payload).encode())

        assert email.message_id == "m1"
        assert email.sender == "a@x.com"
        assert email.recipient == "b@x.com"
        assert email.date == "2024-01-01"
        assert email.body == "Let's meet Friday."
        assert email.attachments == []

    def test_extra_fields_ignored(self, postmark_payload):
        """Test unknown fields do not fail validation."""
        postmark_payload["Headers"] = [{"Name": "X-Spam-Score", "Value": "0"}]
        email = parse_inbound_email(json.dumps(postmark_payload))

        assert "Headers" not in email.to_wire()
        assert "MessageStream" not in email.to_wire()

    def test_to_wire_uses_canonical_naming(self, simple_payload):
        """Test serialization always uses provider naming."""
        wire = parse_inbound_email(json.dumps(simple_payload)).to_wire()

        assert wire["MessageID"] == "m1"
        assert wire["From"] == "a@x.com"
        assert wire["TextBody"] == "Let's meet Friday."
        assert wire["Attachments"] == []

    def test_attachments_blob(self, postmark_payload):
        """Test attachments are kept as an opaque JSON string."""
        email = parse_inbound_email(json.dumps(postmark_payload))
        blob = json.loads(email.attachments_blob())

        assert blob[0]["Name"] == "menu.pdf"
        assert blob[0]["ContentType"] == "application/pdf"

    @pytest.mark.parametrize("field", ["MessageID", "Subject", "From", "To", "Date", "TextBody"])
    def test_missing_required_field(self, postmark_payload, field):
        """Test every required field is enforced."""
        del postmark_payload[field]

        with pytest.raises(PayloadValidationError) as exc_info:
            parse_inbound_email(json.dumps(postmark_payload))

        assert exc_info.value.status_code == 400
        assert exc_info.value.fields == [field]

    def test_wrong_primitive_type(self, postmark_payload):
        """Test numbers are not coerced into strings."""
        postmark_payload["Subject"] = 42

        with pytest.raises(PayloadValidationError) as exc_info:
            parse_inbound_email(json.dumps(postmark_payload))

        assert exc_info.value.fields == ["Subject"]

    def test_wrong_attachment_type(self, postmark_payload):
        """Test nested attachment fields are validated and reported by path."""
        postmark_payload["Attachments"][0]["ContentLength"] = "2048"

        with pytest.raises(PayloadValidationError) as exc_info:
            parse_inbound_email(json.dumps(postmark_payload))

        assert exc_info.value.fields == ["Attachments.0.ContentLength"]

    def test_multiple_fields_reported(self, postmark_payload):
        """Test all offending fields are named."""
        del postmark_payload["Subject"]
        postmark_payload["TextBody"] = None

        with pytest.raises(PayloadValidationError) as exc_info:
            parse_inbound_email(json.dumps(postmark_payload))

        assert set(exc_info.value.fields) == {"Subject", "TextBody"}

    def test_invalid_json(self):
        """Test a body that is not JSON."""
        with pytest.raises(PayloadValidationError) as exc_info:
            parse_inbound_email(b"{not json")

        assert exc_info.value.fields == ["body"]

    def test_non_object_body(self):
        """Test a JSON array is rejected."""
        with pytest.raises(PayloadValidationError):
            parse_inbound_email(b"[]")

    def test_error_body(self):
        """Test the JSON body returned for validation failures."""
        error = PayloadValidationError(["Subject"])

        assert error.to_body() == {"error": "Invalid payload", "fields": ["Subject"]}
