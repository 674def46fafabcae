"""In-memory email adapter. Keeps every message for inspection."""

from uuid import uuid4

from opinalocal.channel.email_port import EmailPort


class RecordingEmailAdapter(EmailPort):
    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.raise_on_send = False

    def configure(self, should_succeed=True, failure_reason="Email delivery failed", raise_on_send=False):
        """Make later sends fail, either by result or by raising."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_on_send = raise_on_send

    def send(self, to, subject, body, html_body=None, sender=None):
        if self.raise_on_send:
            raise ConnectionError(self.failure_reason)
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "from": sender,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def emails_to(self, address):
        return [email for email in self.sent_emails if email["to"] == address]
