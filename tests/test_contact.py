"""
Contact Mailer Tests
"""

import pytest
from pathlib import Path
from unittest.mock import Mock, patch

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "python"))

import requests

from contact import (
    BrevoTransport,
    ContactConfigError,
    ContactDeliveryError,
    ContactError,
    ContactMessage,
    SMTPTransport,
    send_contact,
    transport_from_env,
)


@pytest.fixture
def message():
    return ContactMessage(email="ada@example.com", message="Hello", name="Ada", plan="Pro")


class TestContactMessage:
    """Tests for the contact message shape."""

    def test_subject_with_plan(self, message):
        assert message.subject == "QuickFlow contact - Pro"

    def test_subject_without_plan(self):
        assert ContactMessage(email="a@b.c", message="Hi").subject == "QuickFlow contact"

    def test_subject_folds_line_breaks(self):
        message = ContactMessage(email="a@b.c", message="Hi", plan="Pro\r\nBcc: x@evil.io")
        assert message.subject == "QuickFlow contact - Pro Bcc: x@evil.io"

    def test_body(self, message):
        assert message.body == (
            "Hello\n\n---\n"
            "Name: Ada\n"
            "Email: ada@example.com\n"
            "Source: -\n"
            "Plan: Pro\n"
        )

    @pytest.mark.parametrize("email,text", [("", "Hi"), ("a@b.c", "   "), (None, None)])
    def test_validation(self, email, text):
        with pytest.raises(ContactError):
            ContactMessage(email=email, message=text).validate()


class TestBrevoTransport:
    """Tests for the Brevo HTTP transport."""

    def test_missing_key(self, message):
        with pytest.raises(ContactConfigError):
            BrevoTransport(None, "from@x.io", "support@x.io").send(message)

    @patch("contact.mailer.requests.post")
    def test_send(self, mock_post, message):
        mock_post.return_value = Mock(ok=True)

        BrevoTransport("key-1", "from@x.io", "support@x.io").send(message)

        _, kwargs = mock_post.call_args
        assert kwargs["headers"]["api-key"] == "key-1"
        assert kwargs["json"]["to"] == [{"email": "support@x.io"}]
        assert "replyTo" not in kwargs["json"]
        assert kwargs["json"]["subject"] == "QuickFlow contact - Pro"

    @patch("contact.mailer.requests.post")
    def test_rejected(self, mock_post, message):
        mock_post.return_value = Mock(ok=False, text="invalid sender")

        with pytest.raises(ContactDeliveryError, match="invalid sender"):
            BrevoTransport("key-1", "from@x.io", "support@x.io").send(message)

    @patch("contact.mailer.requests.post")
    def test_network_error(self, mock_post, message):
        mock_post.side_effect = requests.ConnectionError("down")

        with pytest.raises(ContactDeliveryError):
            BrevoTransport("key-1", "from@x.io", "support@x.io").send(message)


class TestTransportSelection:
    """Tests for transport_from_env and send_contact."""

    def test_brevo_default(self, monkeypatch):
        monkeypatch.delenv("CONTACT_TRANSPORT", raising=False)
        monkeypatch.setenv("BREVO_API_KEY", "k")
        monkeypatch.setenv("SUPPORT_EMAIL", "help@x.io")

        transport = transport_from_env()
        assert isinstance(transport, BrevoTransport)
        assert transport.recipient == "help@x.io"

    def test_smtp(self, monkeypatch):
        monkeypatch.setenv("CONTACT_TRANSPORT", "smtp")
        monkeypatch.setenv("SMTP_HOST", "smtp.x.io")
        monkeypatch.setenv("SMTP_PORT", "465")

        transport = transport_from_env()
        assert isinstance(transport, SMTPTransport)
        assert transport.port == 465

    @patch("contact.mailer.smtplib.SMTP")
    def test_smtp_send(self, mock_smtp):
        smtp = mock_smtp.return_value.__enter__.return_value
        transport = SMTPTransport("smtp.x.io", 587, "u", "p", "from@x.io", "support@x.io")

        transport.send(ContactMessage(email="ada@example.com\r\nBcc: x@evil.io", message="Hi"))

        sent = smtp.send_message.call_args.args[0]
        assert sent["Reply-To"] is None
        assert sent["To"] == "support@x.io"
        smtp.login.assert_called_once_with("u", "p")

    def test_smtp_requires_host(self, message):
        transport = SMTPTransport(None, 587, None, None, "from@x.io", "support@x.io")
        with pytest.raises(ContactConfigError):
            transport.send(message)

    def test_send_contact_validates_first(self):
        transport = Mock()
        with pytest.raises(ContactError):
            send_contact(ContactMessage(email="", message="x"), transport)
        transport.send.assert_not_called()

    def test_send_contact(self, message):
        transport = Mock()
        send_contact(message, transport)
        transport.send.assert_called_once_with(message)
