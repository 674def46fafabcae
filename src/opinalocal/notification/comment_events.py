"""Notifications reacts to comments: the review's author hears about them."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from opinalocal.comment.events import CommentAdded
from opinalocal.domain import opinalocal
from opinalocal.notification.helpers import notify_user
from opinalocal.notification.notification import Notification, NotificationType
from opinalocal.restaurant.restaurant import Restaurant
from opinalocal.user.user import NotificationPreference, User

logger = structlog.get_logger(__name__)


@opinalocal.event_handler(part_of=Notification, stream_category="opinalocal::comment")
class CommentEventsHandler:
    @handle(CommentAdded)
    def on_comment_added(self, event: CommentAdded) -> None:
        # Commenting on your own review is not news
        if str(event.review_author_id) == str(event.user_id):
            return

        try:
            try:
                commenter_name = current_domain.repository_for(User).get(event.user_id).name
            except ObjectNotFoundError:
                commenter_name = "Alguém"
            try:
                restaurant_name = current_domain.repository_for(Restaurant).get(event.restaurant_id).name
            except ObjectNotFoundError:
                restaurant_name = "um restaurante"

            notify_user(
                user_id=event.review_author_id,
                notification_type=NotificationType.NEW_COMMENT.value,
                context={
                    "comment_id": str(event.comment_id),
                    "review_id": str(event.review_id),
                    "restaurant_id": str(event.restaurant_id),
                    "restaurant_name": restaurant_name,
                    "commenter_name": commenter_name,
                    "comment_text": event.text,
                },
                preference=NotificationPreference.COMMENT,
                source_event_type="CommentAdded",
            )
        except Exception:
            logger.exception("Comment notification failed", comment_id=str(event.comment_id))
