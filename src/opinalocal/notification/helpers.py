"""Shared helper for notification event handlers.

look up the user → check the preference → render the template → create one
Notification per channel (email, plus one push per registered device).
"""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from opinalocal.notification.notification import Notification, NotificationChannel
from opinalocal.templates import get_template
from opinalocal.user.queries import push_subscriptions_for
from opinalocal.user.user import User

logger = structlog.get_logger(__name__)


def notify_user(user_id, notification_type, context, preference, source_event_type=None):
    """Create the notifications ``user_id`` should receive for one event.

    Returns the ids of the notifications created; empty when the user is
    unknown or has switched ``preference`` off.
    """
    try:
        user = current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        logger.info("Notification recipient not found", user_id=str(user_id), notification_type=notification_type)
        return []

    if not user.is_subscribed_to(preference):
        logger.info(
            "User opted out of notification",
            user_id=str(user_id),
            notification_type=notification_type,
            preference=str(preference),
        )
        return []

    template_cls = get_template(notification_type)
    rendered = template_cls.render(context)

    recipients = []
    if NotificationChannel.EMAIL.value in template_cls.default_channels:
        recipients.append((NotificationChannel.EMAIL.value, user.email))
    if NotificationChannel.PUSH.value in template_cls.default_channels:
        for subscription in push_subscriptions_for(user.id):
            recipients.append((NotificationChannel.PUSH.value, subscription.subscription))

    repo = current_domain.repository_for(Notification)
    notification_ids = []
    for channel, address in recipients:
        notification = Notification.create(
            recipient_id=str(user.id),
            recipient_address=address,
            notification_type=notification_type,
            channel=channel,
            subject=rendered.get("subject"),
            body=rendered["body"],
            template_name=template_cls.__name__,
            action_url=rendered.get("url"),
            source_event_type=source_event_type,
            context_data=json.dumps(context, default=str),
        )
        repo.add(notification)
        notification_ids.append(str(notification.id))

    logger.info(
        "Notifications created",
        user_id=str(user.id),
        notification_type=notification_type,
        channels=[channel for channel, _ in recipients],
        count=len(notification_ids),
    )
    return notification_ids
