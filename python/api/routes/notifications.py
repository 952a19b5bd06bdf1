"""
Notifications API Routes
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from notifications import (
    FEED_LIMIT,
    Notification,
    incomplete_profile_notifications,
    is_synthetic_id,
    merge_feed,
)

from ..auth import User, get_current_user
from ..database import execute_query, execute_update
from ..queries import scope_conditions, where_sql

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def synthetic_notifications(user: User) -> list[Notification]:
    """Incomplete customer/vendor profile notifications for the user."""
    result = []
    for kind, table in (("customer", "customers"), ("vendor", "vendors")):
        params: dict = {}
        conditions = ["(coalesce(trim(name), '') = '' OR coalesce(trim(phone), '') = '')"]
        conditions += scope_conditions(user, params)
        rows = execute_query(
            f"""
            SELECT id::text, name, phone
            FROM {table}
            {where_sql(conditions)}
            ORDER BY created_at DESC
            LIMIT {FEED_LIMIT}
            """,
            params,
        )
        result.extend(incomplete_profile_notifications(kind, rows, user.id))
    return result


@router.get("")
async def get_notifications(
    user: User = Depends(get_current_user),
) -> dict:
    """Notification feed: incomplete profiles first, then stored notifications."""
    rows = execute_query(
        f"""
        SELECT id::text, user_id::text, title, message, type, is_read, created_at
        FROM notifications
        WHERE user_id = :user_id
        ORDER BY created_at DESC
        LIMIT {FEED_LIMIT}
        """,
        {"user_id": user.id},
    )
    persisted = [Notification.from_row(r) for r in rows]

    try:
        synthetic = synthetic_notifications(user)
    except SQLAlchemyError as e:
        logger.debug(f"Skipping incomplete profile notifications: {e}")
        synthetic = []

    return merge_feed(synthetic, persisted).to_dict()


@router.post("/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    user: User = Depends(get_current_user),
) -> dict:
    """Mark a notification read. Computed notifications are not stored."""
    if is_synthetic_id(notification_id):
        return {"id": notification_id, "is_read": True, "persisted": False}

    execute_update(
        "notifications",
        {"is_read": True},
        {"id": notification_id, "user_id": user.id},
    )
    return {"id": notification_id, "is_read": True, "persisted": True}
