from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from opinalocal.review.queries import (
    get_review,
    recent_reviews,
    reviews_for_restaurant,
    reviews_in_timeframe,
    timeframe_start,
    with_details,
)
from opinalocal.review.review import Review


def _backdate(review_id, moment):
    repo = current_domain.repository_for(Review)
    review = get_review(review_id)
    review.created_at = moment
    repo.add(review)


class TestTimeframeStart:
    # Wednesday afternoon
    NOW = datetime(2025, 3, 12, 15, 45, tzinfo=UTC)

    def test_today_starts_at_midnight(self):
        assert timeframe_start("today", now=self.NOW) == datetime(2025, 3, 12, tzinfo=UTC)

    def test_week_starts_on_monday(self):
        assert timeframe_start("week", now=self.NOW) == datetime(2025, 3, 10, tzinfo=UTC)

    def test_month_starts_on_the_first(self):
        assert timeframe_start("month", now=self.NOW) == datetime(2025, 3, 1, tzinfo=UTC)

    def test_no_timeframe_is_unbounded(self):
        assert timeframe_start(None) is None

    def test_unknown_timeframe(self):
        with pytest.raises(ValidationError) as exc:
            timeframe_start("year")
        assert "timeframe" in exc.value.messages


class TestReviewListings:
    def test_timeframe_filters_old_reviews(self, register_user, register_restaurant, submit_review):
        user_id = register_user()
        restaurant_id = register_restaurant()
        fresh = submit_review(user_id, restaurant_id)
        stale = submit_review(user_id, restaurant_id)
        _backdate(stale, datetime.now(UTC) - timedelta(days=40))

        assert [str(r.id) for r in reviews_in_timeframe("month")] == [fresh]
        assert [str(r.id) for r in reviews_in_timeframe()] == [fresh, stale]

    def test_recent_reviews_limit(self, register_user, register_restaurant, submit_review):
        user_id = register_user()
        restaurant_id = register_restaurant()
        ids = [submit_review(user_id, restaurant_id) for _ in range(4)]

        assert [str(r.id) for r in recent_reviews(limit=2)] == ids[::-1][:2]
        assert len(recent_reviews()) == 4


class TestReviewDetails:
    def test_author_and_restaurant_attached(self, register_user, register_restaurant, submit_review):
        restaurant_id = register_restaurant(name="Bar do Zé")
        ana = register_user(name="Ana")
        bruno = register_user(name="Bruno")
        submit_review(ana, restaurant_id)
        submit_review(bruno, restaurant_id)

        details = with_details(reviews_for_restaurant(restaurant_id))

        assert [d.author.name for d in details] == ["Bruno", "Ana"]
        assert {d.restaurant.name for d in details} == {"Bar do Zé"}

    def test_missing_author_is_none(self, register_user, register_restaurant, submit_review):
        review_id = submit_review(register_user(), register_restaurant())
        review = get_review(review_id)
        review.user_id = "gone"

        [details] = with_details([review])

        assert details.author is None
        assert details.restaurant is not None
