"""Sent when a category you suggested is approved."""

from opinalocal.notification.notification import NotificationChannel, NotificationType


class CategoryApprovedTemplate:
    notification_type = NotificationType.CATEGORY_APPROVED.value
    default_channels = [NotificationChannel.EMAIL.value, NotificationChannel.PUSH.value]

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("category_name", "sugerida")
        return {
            "subject": f"Categoria \"{name}\" aprovada",
            "body": (
                f"A categoria \"{name}\" que você sugeriu foi aprovada.\n\n"
                "Ela já pode ser usada por todos nas próximas avaliações."
            ),
            "url": "/reviews/new",
        }
