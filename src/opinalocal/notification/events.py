"""Domain events for the Notification aggregate."""

from protean.fields import DateTime, Identifier, String

from opinalocal.domain import opinalocal


@opinalocal.event(part_of="Notification")
class NotificationCreated:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    notification_type: String(required=True)
    channel: String(required=True)
    subject: String()
    template_name: String()
    source_event_type: String()
    created_at: DateTime(required=True)


@opinalocal.event(part_of="Notification")
class NotificationSent:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel: String(required=True)
    sent_at: DateTime(required=True)


@opinalocal.event(part_of="Notification")
class NotificationFailed:
    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel: String(required=True)
    reason: String(required=True)
    failed_at: DateTime(required=True)
