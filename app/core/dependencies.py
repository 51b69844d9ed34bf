"""
FastAPI dependencies for the application.
"""

from typing import Optional

from fastapi import Header

from app.db.session import get_db
from app.services.notification_service import NotificationSender, get_notification_sender

__all__ = ["get_db", "get_actor_id", "get_notifier"]


async def get_actor_id(x_actor_id: Optional[str] = Header(None)) -> Optional[str]:
    """
    Acting user from the X-Actor-ID header.

    Authentication lives in front of this service; the id is only recorded
    as created_by / changed_by.
    """
    if x_actor_id is None:
        return None
    x_actor_id = x_actor_id.strip()
    return x_actor_id[:64] or None


def get_notifier() -> NotificationSender:
    """Notification transport; overridden in tests."""
    return get_notification_sender()
