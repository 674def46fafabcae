"""Sent to earlier reviewers when someone else reviews the same restaurant."""

from opinalocal.notification.notification import NotificationChannel, NotificationType


class NewReviewTemplate:
    notification_type = NotificationType.NEW_REVIEW.value
    default_channels = [NotificationChannel.EMAIL.value, NotificationChannel.PUSH.value]

    @staticmethod
    def render(context: dict) -> dict:
        restaurant = context.get("restaurant_name", "um restaurante")
        reviewer = context.get("reviewer_name", "Alguém")
        rating = context.get("overall_rating")
        rating_line = f"Nota geral: {rating:.1f}\n" if isinstance(rating, (int, float)) else ""
        return {
            "subject": f"Nova avaliação em {restaurant}",
            "body": (
                f"{reviewer} acabou de avaliar {restaurant}, onde você também esteve.\n\n"
                f"{rating_line}"
                "Veja o que mudou desde a sua visita."
            ),
            "url": f"/restaurants/{context.get('restaurant_id', '')}",
        }
