"""In-memory push adapter. Keeps every message for inspection."""

from uuid import uuid4

from opinalocal.channel.push_port import PushPort


class RecordingPushAdapter(PushPort):
    def __init__(self):
        self.sent_pushes: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"

    def configure(self, should_succeed=True, failure_reason="Push delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, subscription, title, body, data=None):
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        # Browsers key a subscription by its endpoint URL
        endpoint = subscription.get("endpoint") if isinstance(subscription, dict) else None
        message_id = f"push-{uuid4().hex[:12]}"
        self.sent_pushes.append(
            {
                "message_id": message_id,
                "endpoint": endpoint,
                "subscription": subscription,
                "title": title,
                "body": body,
                "data": data,
            }
        )
        return {"message_id": message_id, "status": "sent"}
