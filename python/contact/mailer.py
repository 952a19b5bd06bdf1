"""
Contact Mailer Module

Forwards contact-form submissions to the support inbox through the Brevo
transactional email API or a plain SMTP relay.
"""

import logging
import os
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

import requests

logger = logging.getLogger(__name__)

BREVO_ENDPOINT = "https://api.brevo.com/v3/smtp/email"
SENDER_NAME = "QuickFlow"
DEFAULT_SENDER = "no-reply@quickflow.app"
DEFAULT_SUPPORT_EMAIL = "support@quickflow.app"


class ContactError(ValueError):
    """Invalid contact submission."""


class ContactConfigError(RuntimeError):
    """Mail transport is not configured."""


class ContactDeliveryError(RuntimeError):
    """The mail provider rejected the message."""


@dataclass
class ContactMessage:
    """A contact-form submission."""

    email: str
    message: str
    name: str | None = None
    source: str | None = None
    plan: str | None = None

    def validate(self) -> None:
        if not (self.email or "").strip() or not (self.message or "").strip():
            raise ContactError("Missing email or message")

    @property
    def subject(self) -> str:
        plan = " ".join((self.plan or "").split())
        return f"QuickFlow contact - {plan}" if plan else "QuickFlow contact"

    @property
    def body(self) -> str:
        return (
            f"{self.message}\n\n---\n"
            f"Name: {self.name or '-'}\n"
            f"Email: {self.email}\n"
            f"Source: {self.source or '-'}\n"
            f"Plan: {self.plan or '-'}\n"
        )


class BrevoTransport:
    """Sends mail through the Brevo HTTP API."""

    def __init__(self, api_key: str | None, sender: str, recipient: str, timeout: float = 15.0):
        self.api_key = api_key
        self.sender = sender
        self.recipient = recipient
        self.timeout = timeout

    def send(self, contact: ContactMessage) -> None:
        if not self.api_key:
            logger.error("BREVO_API_KEY not configured")
            raise ContactConfigError("Brevo API key not configured")

        payload = {
            "sender": {"email": self.sender, "name": SENDER_NAME},
            "to": [{"email": self.recipient}],
            "subject": contact.subject,
            "textContent": contact.body,
        }

        try:
            response = requests.post(
                BREVO_ENDPOINT,
                json=payload,
                headers={"api-key": self.api_key, "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Brevo request failed: {e}")
            raise ContactDeliveryError(str(e)) from e

        if not response.ok:
            logger.error(f"send-contact brevo error: {response.text}")
            raise ContactDeliveryError(response.text)


class SMTPTransport:
    """Sends mail through an SMTP relay."""

    def __init__(
        self,
        host: str | None,
        port: int,
        username: str | None,
        password: str | None,
        sender: str,
        recipient: str,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.recipient = recipient

    def send(self, contact: ContactMessage) -> None:
        if not self.host:
            raise ContactConfigError("SMTP_HOST not configured")

        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = self.recipient
        msg["Subject"] = contact.subject
        msg.set_content(contact.body)

        smtp_cls = smtplib.SMTP_SSL if self.port == 465 else smtplib.SMTP
        try:
            with smtp_cls(self.host, self.port, timeout=15) as smtp:
                if smtp_cls is smtplib.SMTP:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"send-contact smtp error: {e}")
            raise ContactDeliveryError(str(e)) from e


def transport_from_env():
    """Pick the transport from CONTACT_TRANSPORT (brevo by default)."""
    sender = os.getenv("SMTP_FROM") or os.getenv("SMTP_USER") or DEFAULT_SENDER
    recipient = os.getenv("SUPPORT_EMAIL", DEFAULT_SUPPORT_EMAIL)

    if os.getenv("CONTACT_TRANSPORT", "brevo").lower() == "smtp":
        return SMTPTransport(
            host=os.getenv("SMTP_HOST"),
            port=int(os.getenv("SMTP_PORT", "587")),
            username=os.getenv("SMTP_USER"),
            password=os.getenv("SMTP_PASS"),
            sender=sender,
            recipient=recipient,
        )

    return BrevoTransport(
        api_key=os.getenv("BREVO_API_KEY"),
        sender=sender,
        recipient=recipient,
    )


def send_contact(contact: ContactMessage, transport=None) -> None:
    """Validate and forward a contact submission.

    Raises:
        ContactError: Missing email or message
        ContactConfigError: Transport not configured
        ContactDeliveryError: Provider rejected the message
    """
    contact.validate()
    transport = transport or transport_from_env()
    transport.send(contact)
    logger.info(f"Forwarded contact message from {contact.email}")
