"""Notification aggregate. One side-channel message to one user on one channel.

Notifications are created by event handlers after the triggering write has
committed, then dispatched once through a channel adapter. Delivery is
best-effort: a failed notification is recorded, never retried.

State Machine:
    PENDING → SENT
    PENDING → FAILED
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from opinalocal.domain import opinalocal
from opinalocal.notification.events import (
    NotificationCreated,
    NotificationFailed,
    NotificationSent,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class NotificationType(Enum):
    NEW_REVIEW = "NewReview"
    NEW_COMMENT = "NewComment"
    CATEGORY_APPROVED = "CategoryApproved"


class NotificationChannel(Enum):
    EMAIL = "Email"
    PUSH = "Push"


class NotificationStatus(Enum):
    PENDING = "Pending"
    SENT = "Sent"
    FAILED = "Failed"


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@opinalocal.aggregate
class Notification:
    recipient_id: Identifier(required=True)
    # Email address, or the push subscription JSON for the Push channel
    recipient_address: Text(required=True)

    notification_type: String(choices=NotificationType, required=True)
    channel: String(choices=NotificationChannel, required=True)

    subject: String(max_length=500)
    body: Text(required=True)
    template_name: String(max_length=200)
    action_url: String(max_length=500)

    source_event_type: String(max_length=200)
    context_data: Text()  # JSON used to render the template

    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    sent_at: DateTime()
    failure_reason: String(max_length=500)

    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        recipient_id,
        recipient_address,
        notification_type,
        channel,
        body,
        subject=None,
        template_name=None,
        action_url=None,
        source_event_type=None,
        context_data=None,
    ):
        """Create a new notification in PENDING status."""
        now = datetime.now(UTC)

        notification = cls(
            recipient_id=recipient_id,
            recipient_address=recipient_address,
            notification_type=notification_type,
            channel=channel,
            subject=subject,
            body=body,
            template_name=template_name,
            action_url=action_url,
            source_event_type=source_event_type,
            context_data=context_data,
            status=NotificationStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient_id=str(recipient_id),
                notification_type=notification_type,
                channel=channel,
                subject=subject,
                template_name=template_name,
                source_event_type=source_event_type,
                created_at=now,
            )
        )
        return notification

    def _assert_pending(self):
        if self.status != NotificationStatus.PENDING.value:
            raise ValidationError({"status": [f"Cannot change a notification in {self.status} status"]})

    def mark_sent(self):
        self._assert_pending()

        now = datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.sent_at = now
        self.updated_at = now

        self.raise_(
            NotificationSent(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel=self.channel,
                sent_at=now,
            )
        )

    def mark_failed(self, reason):
        self._assert_pending()

        now = datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.failure_reason = (reason or "Unknown dispatch error")[:500]
        self.updated_at = now

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel=self.channel,
                reason=self.failure_reason,
                failed_at=now,
            )
        )
