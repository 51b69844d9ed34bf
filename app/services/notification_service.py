"""
Outbound notifications (candidate e-mails, interviewer invitations).

Senders are best effort: they run after the transaction committed and a
failure is logged, never raised back into the request.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    """One message for the mail/notification collaborator."""

    event: str
    recipients: List[str]
    subject: str
    payload: Dict[str, Any] = field(default_factory=dict)


class NotificationSender(Protocol):
    """Interface for notification transports."""

    async def send(self, notification: Notification) -> None:
        ...


class LoggingNotificationSender:
    """Default sender: writes the notification to the application log."""

    async def send(self, notification: Notification) -> None:
        logger.info(
            "Notification %s to %s: %s",
            notification.event,
            ", ".join(notification.recipients) or "<none>",
            notification.subject,
        )


class WebhookNotificationSender:
    """POSTs each notification as JSON to a webhook."""

    def __init__(self, url: str, timeout_seconds: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    async def send(self, notification: Notification) -> None:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.post(self.url, json=asdict(notification))
            resp.raise_for_status()


def get_notification_sender() -> NotificationSender:
    if settings.NOTIFICATION_WEBHOOK_URL:
        return WebhookNotificationSender(
            settings.NOTIFICATION_WEBHOOK_URL,
            timeout_seconds=settings.NOTIFICATION_TIMEOUT_SECONDS,
        )
    return LoggingNotificationSender()


async def dispatch_notification(sender: NotificationSender, notification: Notification) -> bool:
    """Send one notification; returns False when the transport failed."""
    try:
        await sender.send(notification)
    except Exception:
        logger.warning("Failed to deliver %s notification", notification.event, exc_info=True)
        return False
    return True
