"""
Notifications Module

Header notification feed: persisted notifications plus incomplete-profile alerts.
"""

from .feed import (
    FEED_LIMIT,
    Notification,
    NotificationFeed,
    incomplete_profile_notifications,
    is_synthetic_id,
    merge_feed,
)

__all__ = [
    "FEED_LIMIT",
    "Notification",
    "NotificationFeed",
    "incomplete_profile_notifications",
    "is_synthetic_id",
    "merge_feed",
]
