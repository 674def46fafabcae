"""Notifications reacts to new reviews.

Everyone who reviewed the same restaurant before is told, once each, except
the author of the new review.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from opinalocal.domain import opinalocal
from opinalocal.notification.helpers import notify_user
from opinalocal.notification.notification import Notification, NotificationType
from opinalocal.restaurant.restaurant import Restaurant
from opinalocal.review.events import ReviewSubmitted
from opinalocal.review.review import Review
from opinalocal.user.user import NotificationPreference, User
from opinalocal.utils.queries import fetch_all

logger = structlog.get_logger(__name__)


def prior_reviewers(restaurant_id, excluding_user_id) -> list[str]:
    """Distinct authors of earlier reviews of the restaurant, oldest first."""
    reviews = sorted(fetch_all(Review, restaurant_id=str(restaurant_id)), key=lambda r: r.created_at)
    seen = {}
    for review in reviews:
        author = str(review.user_id)
        if author != str(excluding_user_id):
            seen.setdefault(author, None)
    return list(seen)


def _name_of(aggregate_cls, identifier, default):
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier).name
    except ObjectNotFoundError:
        return default


@opinalocal.event_handler(part_of=Notification, stream_category="opinalocal::review")
class ReviewEventsHandler:
    @handle(ReviewSubmitted)
    def on_review_submitted(self, event: ReviewSubmitted) -> None:
        try:
            recipients = prior_reviewers(event.restaurant_id, excluding_user_id=event.user_id)
            if not recipients:
                return

            context = {
                "review_id": str(event.review_id),
                "restaurant_id": str(event.restaurant_id),
                "restaurant_name": _name_of(Restaurant, event.restaurant_id, "um restaurante"),
                "reviewer_name": _name_of(User, event.user_id, "Alguém"),
                "overall_rating": event.overall_rating,
            }
            for user_id in recipients:
                notify_user(
                    user_id=user_id,
                    notification_type=NotificationType.NEW_REVIEW.value,
                    context=context,
                    preference=NotificationPreference.NEW_REVIEW,
                    source_event_type="ReviewSubmitted",
                )
        except Exception:
            logger.exception("New review fan-out failed", review_id=str(event.review_id))
