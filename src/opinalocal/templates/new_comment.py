"""Sent to a review's author when someone comments on it."""

from opinalocal.notification.notification import NotificationChannel, NotificationType

EXCERPT_LENGTH = 140


class NewCommentTemplate:
    notification_type = NotificationType.NEW_COMMENT.value
    default_channels = [NotificationChannel.EMAIL.value, NotificationChannel.PUSH.value]

    @staticmethod
    def render(context: dict) -> dict:
        commenter = context.get("commenter_name", "Alguém")
        restaurant = context.get("restaurant_name", "um restaurante")
        text = context.get("comment_text", "")
        if len(text) > EXCERPT_LENGTH:
            text = text[: EXCERPT_LENGTH - 1].rstrip() + "…"
        return {
            "subject": f"{commenter} comentou na sua avaliação",
            "body": f"{commenter} comentou na sua avaliação de {restaurant}:\n\n\"{text}\"",
            "url": f"/restaurants/{context.get('restaurant_id', '')}",
        }
