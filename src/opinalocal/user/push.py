"""PushSubscription aggregate for browser push endpoints registered by a user.

A user may hold several subscriptions at once, one per device or browser.
The payload is opaque to the domain and handed to the push channel as-is.
"""

import json
from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier, Text
from protean.utils.globals import current_domain

from opinalocal.domain import opinalocal
from opinalocal.user.user import User


@opinalocal.event(part_of="PushSubscription")
class PushSubscriptionSaved:
    __version__ = 1

    subscription_id: Identifier(required=True)
    user_id: Identifier(required=True)
    saved_at: DateTime(required=True)


@opinalocal.aggregate
class PushSubscription:
    user_id: Identifier(required=True)
    subscription: Text(required=True)  # JSON payload issued by the browser
    created_at: DateTime()

    @classmethod
    def save_for(cls, user_id, subscription):
        if isinstance(subscription, str):
            try:
                payload = json.loads(subscription)
            except ValueError:
                raise ValidationError({"subscription": ["Subscription must be a JSON object"]}) from None
        else:
            payload = subscription

        if not isinstance(payload, dict) or not payload:
            raise ValidationError({"subscription": ["Subscription must be a JSON object"]})

        now = datetime.now(UTC)
        record = cls(
            user_id=user_id,
            subscription=json.dumps(payload, sort_keys=True),
            created_at=now,
        )
        record.raise_(
            PushSubscriptionSaved(
                subscription_id=str(record.id),
                user_id=str(user_id),
                saved_at=now,
            )
        )
        return record

    def payload(self):
        return json.loads(self.subscription)


@opinalocal.command(part_of="PushSubscription")
class SavePushSubscription:
    user_id: Identifier(required=True)
    subscription: Text(required=True)


@opinalocal.command_handler(part_of=PushSubscription)
class SavePushSubscriptionHandler:
    @handle(SavePushSubscription)
    def save_subscription(self, command):
        try:
            current_domain.repository_for(User).get(command.user_id)
        except ObjectNotFoundError:
            raise ValidationError({"user_id": [f"User {command.user_id} does not exist"]}) from None

        record = PushSubscription.save_for(
            user_id=command.user_id,
            subscription=command.subscription,
        )
        current_domain.repository_for(PushSubscription).add(record)
        return str(record.id)
