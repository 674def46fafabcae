"""NotificationDispatcher — sends each new notification through its channel.

Reacts to NotificationCreated, hands the message to the channel adapter and
records the outcome as SENT or FAILED. Adapter errors stop here.
"""

import json

import structlog
from protean import handle
from protean.utils.globals import current_domain

from opinalocal.channel import get_channel
from opinalocal.domain import opinalocal
from opinalocal.notification.events import NotificationCreated
from opinalocal.notification.notification import (
    Notification,
    NotificationChannel,
    NotificationStatus,
)
from opinalocal.templates.layout import get_email_layout, render_email

logger = structlog.get_logger(__name__)

DEFAULT_SENDER = "OpinaLocal <nao-responda@opinalocal.com.br>"


def _email_layout():
    sender = current_domain.config.get("custom", {}).get("email_from", DEFAULT_SENDER)
    return get_email_layout(sender)


@opinalocal.event_handler(part_of=Notification)
class NotificationDispatcher:
    @handle(NotificationCreated)
    def on_notification_created(self, event: NotificationCreated) -> None:
        repo = current_domain.repository_for(Notification)
        notification = repo.get(event.notification_id)

        if notification.status != NotificationStatus.PENDING.value:
            logger.info(
                "Notification already dispatched",
                notification_id=str(notification.id),
                status=notification.status,
            )
            return

        try:
            adapter = get_channel(notification.channel)
            result = _dispatch_via_channel(adapter, notification, _email_layout())

            if result.get("status") == "sent":
                notification.mark_sent()
            else:
                notification.mark_failed(result.get("error", "Unknown dispatch error"))
                logger.warning(
                    "Notification rejected by channel",
                    notification_id=str(notification.id),
                    channel=notification.channel,
                    error=notification.failure_reason,
                )
        except Exception as exc:
            notification.mark_failed(str(exc))
            logger.error(
                "Notification dispatch failed",
                notification_id=str(notification.id),
                channel=notification.channel,
                error=str(exc),
            )

        repo.add(notification)


def _dispatch_via_channel(adapter, notification: Notification, layout) -> dict:
    channel = notification.channel

    if channel == NotificationChannel.EMAIL.value:
        return adapter.send(
            to=notification.recipient_address,
            subject=notification.subject or "",
            body=notification.body,
            html_body=render_email(layout, notification.subject, notification.body, notification.action_url),
            sender=layout.sender,
        )
    elif channel == NotificationChannel.PUSH.value:
        return adapter.send(
            subscription=json.loads(notification.recipient_address),
            title=notification.subject or "",
            body=notification.body,
            data={"url": notification.action_url or "/"},
        )
    else:
        return {"status": "failed", "error": f"Unknown channel: {channel}"}
