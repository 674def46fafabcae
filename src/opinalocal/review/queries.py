"""Read-side lookups over reviews. Listings are newest first."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from opinalocal.restaurant.restaurant import Restaurant
from opinalocal.review.review import Review
from opinalocal.user.user import User
from opinalocal.utils.queries import fetch_all, fetch_by_ids

DEFAULT_RECENT_LIMIT = 10

TIMEFRAMES = ("today", "week", "month")


@dataclass(frozen=True)
class ReviewDetails:
    """A review with its author and restaurant, as listings show it."""

    review: Review
    author: User | None
    restaurant: Restaurant | None


def _newest_first(reviews):
    return sorted(reviews, key=lambda r: r.created_at, reverse=True)


def get_review(review_id):
    return current_domain.repository_for(Review).get(review_id)


def reviews_for_restaurant(restaurant_id):
    return _newest_first(fetch_all(Review, restaurant_id=restaurant_id))


def reviews_by_user(user_id):
    return _newest_first(fetch_all(Review, user_id=user_id))


def recent_reviews(limit=None):
    if limit is None:
        limit = current_domain.config.get("custom", {}).get("recent_reviews_limit", DEFAULT_RECENT_LIMIT)
    return _newest_first(fetch_all(Review))[: int(limit)]


def timeframe_start(timeframe, now=None):
    """Earliest creation time included by ``timeframe``; None means no bound.

    Periods are calendar periods in UTC: ``week`` starts on Monday and
    ``month`` on the first day of the month.
    """
    if timeframe is None:
        return None
    if timeframe not in TIMEFRAMES:
        raise ValidationError({"timeframe": [f"Invalid timeframe: {timeframe!r}. Use one of {list(TIMEFRAMES)}"]})

    now = now or datetime.now(UTC)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if timeframe == "today":
        return midnight
    if timeframe == "week":
        return midnight - timedelta(days=midnight.weekday())
    return midnight.replace(day=1)


def _aware(moment):
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


def reviews_in_timeframe(timeframe=None):
    start = timeframe_start(timeframe)
    reviews = fetch_all(Review)
    if start is not None:
        reviews = [r for r in reviews if r.created_at and _aware(r.created_at) >= start]
    return _newest_first(reviews)


def with_details(reviews) -> list[ReviewDetails]:
    """Attach each review's author and restaurant, loading each record once."""
    authors = fetch_by_ids(User, (r.user_id for r in reviews))
    restaurants = fetch_by_ids(Restaurant, (r.restaurant_id for r in reviews))
    return [
        ReviewDetails(
            review=r,
            author=authors.get(str(r.user_id)),
            restaurant=restaurants.get(str(r.restaurant_id)),
        )
        for r in reviews
    ]
