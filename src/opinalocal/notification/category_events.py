"""Notifications reacts to Category moderation events."""

import structlog
from protean import handle

from opinalocal.category.category import ADMIN_CREATOR
from opinalocal.category.events import CategoryApproved
from opinalocal.domain import opinalocal
from opinalocal.notification.helpers import notify_user
from opinalocal.notification.notification import Notification, NotificationType
from opinalocal.user.user import NotificationPreference

logger = structlog.get_logger(__name__)


@opinalocal.event_handler(part_of=Notification, stream_category="opinalocal::category")
class CategoryEventsHandler:
    @handle(CategoryApproved)
    def on_category_approved(self, event: CategoryApproved) -> None:
        """Tell the person who suggested the category that it was approved."""
        if event.created_by == ADMIN_CREATOR:
            return

        try:
            notify_user(
                user_id=event.created_by,
                notification_type=NotificationType.CATEGORY_APPROVED.value,
                context={"category_id": str(event.category_id), "category_name": event.name},
                preference=NotificationPreference.CATEGORY_APPROVAL,
                source_event_type="CategoryApproved",
            )
        except Exception:
            logger.exception("Category approval notification failed", category_id=str(event.category_id))
