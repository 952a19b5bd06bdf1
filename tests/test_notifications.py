"""
Notification Feed Tests
"""

from datetime import datetime
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "python"))

from notifications import (
    Notification,
    incomplete_profile_notifications,
    is_synthetic_id,
    merge_feed,
)


class TestIncompleteProfiles:
    """Tests for synthetic incomplete-profile notifications."""

    def test_missing_phone(self):
        [n] = incomplete_profile_notifications("customer", [{"id": 1, "name": "Acme", "phone": ""}], "u1")

        assert n.id == "customer:1"
        assert n.title == "Incomplete customer profile"
        assert n.message == 'Customer "Acme" is missing a phone number - please complete the profile.'
        assert n.link == "/customers"
        assert n.is_read is False
        assert n.synthetic is True

    def test_missing_both(self):
        [n] = incomplete_profile_notifications("vendor", [{"id": "v9", "name": None, "phone": None}])

        assert n.id == "vendor:v9"
        assert n.title == "Incomplete vendor profile"
        assert n.message == 'Vendor "(no name)" is missing a name and a phone number - please complete the profile.'
        assert n.link == "/vendors"

    def test_missing_name_only(self):
        [n] = incomplete_profile_notifications("customer", [{"id": 2, "name": "  ", "phone": "555"}])
        assert "is missing a name -" in n.message

    def test_complete_rows_skipped(self):
        assert incomplete_profile_notifications("customer", [{"id": 1, "name": "A", "phone": "1"}, None]) == []

    def test_is_synthetic_id(self):
        assert is_synthetic_id("customer:1")
        assert is_synthetic_id("vendor:abc")
        assert not is_synthetic_id("3f0c8a7e-1111-2222-3333-444455556666")
        assert not is_synthetic_id("customer:")


class TestMergeFeed:
    """Tests for merging the feed."""

    def _persisted(self, count, read=False):
        return [
            Notification(id=f"n{i}", title="T", message="M", is_read=read, created_at=datetime(2025, 1, 1))
            for i in range(count)
        ]

    def test_synthetic_first(self):
        synthetic = incomplete_profile_notifications("customer", [{"id": 1, "name": "A", "phone": ""}])
        feed = merge_feed(synthetic, self._persisted(2, read=True))

        assert [n.id for n in feed.notifications] == ["customer:1", "n0", "n1"]
        assert feed.unread == 1

    def test_deduplicated_by_id(self):
        persisted = self._persisted(1) + self._persisted(1)
        assert len(merge_feed([], persisted).notifications) == 1

    def test_truncated(self):
        synthetic = incomplete_profile_notifications(
            "vendor", [{"id": i, "name": "", "phone": ""} for i in range(30)]
        )
        feed = merge_feed(synthetic, self._persisted(30))

        assert len(feed.notifications) == 50
        assert feed.notifications[0].id == "vendor:0"
        assert feed.unread == 50

    def test_to_dict(self):
        data = merge_feed([], self._persisted(1)).to_dict()
        assert data["unread"] == 1
        assert data["notifications"][0]["created_at"] == "2025-01-01T00:00:00"
        assert data["notifications"][0]["link"] is None
