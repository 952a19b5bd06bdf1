"""
Contact Module

Contact-form forwarding to the support inbox.
"""

from .mailer import (
    BrevoTransport,
    ContactConfigError,
    ContactDeliveryError,
    ContactError,
    ContactMessage,
    SMTPTransport,
    send_contact,
    transport_from_env,
)

__all__ = [
    "BrevoTransport",
    "ContactConfigError",
    "ContactDeliveryError",
    "ContactError",
    "ContactMessage",
    "SMTPTransport",
    "send_contact",
    "transport_from_env",
]
