import json
import logging

import httpx
import pytest

from app.services.notification_service import (
    LoggingNotificationSender,
    Notification,
    WebhookNotificationSender,
    dispatch_notification,
)


def _notification():
    return Notification(
        event="onboard_approved",
        recipients=["ada@example.com"],
        subject="Your offer has been approved",
        payload={"candidate_id": "c-1"},
    )


class ExplodingSender:
    async def send(self, notification):
        raise RuntimeError("smtp down")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failed_delivery_is_logged_not_raised(caplog):
    with caplog.at_level(logging.WARNING, logger="app.services.notification_service"):
        delivered = await dispatch_notification(ExplodingSender(), _notification())

    assert delivered is False
    assert "onboard_approved" in caplog.text


@pytest.mark.unit
@pytest.mark.asyncio
async def test_logging_sender(caplog):
    with caplog.at_level(logging.INFO, logger="app.services.notification_service"):
        assert await dispatch_notification(LoggingNotificationSender(), _notification()) is True

    assert "ada@example.com" in caplog.text


@pytest.mark.unit
@pytest.mark.asyncio
async def test_webhook_sender_posts_json():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(202)

    sender = WebhookNotificationSender("https://hooks.example.com/notify", transport=httpx.MockTransport(handler))

    assert await dispatch_notification(sender, _notification()) is True
    assert seen[0]["event"] == "onboard_approved"
    assert seen[0]["recipients"] == ["ada@example.com"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_webhook_error_status_counts_as_failure():
    sender = WebhookNotificationSender(
        "https://hooks.example.com/notify",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )

    assert await dispatch_notification(sender, _notification()) is False
