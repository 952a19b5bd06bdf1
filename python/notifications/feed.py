"""
Notification Feed Module

Merges persisted notifications with synthetic "incomplete profile"
notifications derived from customer and vendor rows.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

logger = logging.getLogger(__name__)

FEED_LIMIT = 50

TARGET_LINKS = {
    "customer": "/customers",
    "vendor": "/vendors",
}


@dataclass
class Notification:
    """A notification shown in the header bell."""

    id: str
    title: str
    message: str
    type: str | None = None
    is_read: bool = False
    user_id: str | None = None
    synthetic: bool = False
    entity_id: str | None = None
    created_at: datetime | None = None

    @property
    def link(self) -> str | None:
        return TARGET_LINKS.get(self.type or "")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "type": self.type,
            "is_read": self.is_read,
            "synthetic": self.synthetic,
            "entity_id": self.entity_id,
            "link": self.link,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_row(cls, row: dict) -> "Notification":
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            message=row.get("message") or "",
            type=row.get("type"),
            is_read=bool(row.get("is_read")),
            user_id=str(row["user_id"]) if row.get("user_id") else None,
            created_at=row.get("created_at"),
        )


def is_synthetic_id(notification_id: str) -> bool:
    prefix, _, rest = notification_id.partition(":")
    return prefix in TARGET_LINKS and bool(rest)


def _missing_parts(name: str, phone: str) -> str:
    parts = []
    if not name:
        parts.append("a name")
    if not phone:
        parts.append("a phone number")
    return " and ".join(parts)


def incomplete_profile_notifications(
    kind: str,
    records: Iterable[dict],
    user_id: str | None = None,
) -> list[Notification]:
    """Notifications for customer/vendor rows missing a name or phone.

    Args:
        kind: 'customer' or 'vendor'
        records: Rows with id, name, phone
        user_id: Recipient

    Returns:
        Unread synthetic notifications
    """
    label = kind.capitalize()
    notifications = []

    for record in records:
        if not record:
            continue
        name = str(record.get("name") or "").strip()
        phone = str(record.get("phone") or "").strip()
        if name and phone:
            continue

        display = record.get("name") or "(no name)"
        notifications.append(Notification(
            id=f"{kind}:{record['id']}",
            title=f"Incomplete {kind} profile",
            message=f'{label} "{display}" is missing {_missing_parts(name, phone)} - please complete the profile.',
            type=kind,
            is_read=False,
            user_id=user_id,
            synthetic=True,
            entity_id=str(record["id"]),
        ))

    return notifications


@dataclass
class NotificationFeed:
    notifications: list[Notification]

    @property
    def unread(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    def to_dict(self) -> dict:
        return {
            "notifications": [n.to_dict() for n in self.notifications],
            "unread": self.unread,
        }


def merge_feed(
    synthetic: Iterable[Notification],
    persisted: Iterable[Notification],
    limit: int = FEED_LIMIT,
) -> NotificationFeed:
    """Synthetic notifications first, then persisted ones, deduplicated by id.

    Args:
        synthetic: Computed notifications
        persisted: Stored notifications (newest first)
        limit: Maximum feed length

    Returns:
        NotificationFeed
    """
    merged: dict[str, Notification] = {}
    for notification in synthetic:
        merged[notification.id] = notification
    for notification in persisted:
        merged.setdefault(notification.id, notification)

    return NotificationFeed(notifications=list(merged.values())[:limit])
