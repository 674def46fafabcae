"""Review aggregate: one user's multi-category rating of one restaurant visit.

Scores come in two maps: ``standard`` holds the four fixed categories and
``custom`` holds community categories by name. The overall rating is always
derived from both maps at submission and cannot be supplied by callers.

Reviews are immutable once submitted.
"""

import json
from datetime import UTC, date, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Date,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    Text,
    ValueObject,
)

from opinalocal.domain import opinalocal
from opinalocal.rating.aggregator import review_overall_rating
from opinalocal.review.events import ReviewSubmitted

MIN_SCORE = 1
MAX_SCORE = 5

# Standard category name → Ratings field
STANDARD_CATEGORIES = {
    "Food": "food",
    "Service": "service",
    "Ambience": "ambience",
    "Price": "price",
}


# ---------------------------------------------------------------------------
# Score validation
# ---------------------------------------------------------------------------
def _check_score(field, name, score):
    # bool is an int subclass, but True is not a star rating
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError({field: [f"Score for {name!r} must be an integer"]})
    if score < MIN_SCORE or score > MAX_SCORE:
        raise ValidationError({field: [f"Score for {name!r} must be between {MIN_SCORE} and {MAX_SCORE}"]})


def validate_standard(standard):
    standard = standard or {}
    if not isinstance(standard, dict):
        raise ValidationError({"standard": ["Standard ratings must be a mapping of category to score"]})
    for name, score in standard.items():
        if name not in STANDARD_CATEGORIES:
            raise ValidationError(
                {"standard": [f"Unknown standard category {name!r}. Use one of {sorted(STANDARD_CATEGORIES)}"]}
            )
        _check_score("standard", name, score)
    return dict(standard)


def validate_custom(custom):
    custom = custom or {}
    if not isinstance(custom, dict):
        raise ValidationError({"custom": ["Custom ratings must be a mapping of category to score"]})
    cleaned = {}
    seen = set()
    for name, score in custom.items():
        if not isinstance(name, str) or not name.strip():
            raise ValidationError({"custom": ["Custom category names cannot be empty"]})
        _check_score("custom", name, score)
        key = name.strip()
        # Category names are unique ignoring case, so " Wi-Fi" and "wi-fi" collide
        if key.casefold() in seen:
            raise ValidationError({"custom": [f"Category {key!r} is rated more than once"]})
        seen.add(key.casefold())
        cleaned[key] = score
    return cleaned


def coerce_visit_date(value):
    """Accept a date, a datetime or an ISO 8601 string; keep only the date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            raise ValidationError({"visit_date": [f"Invalid visit date: {value!r}"]}) from None
    raise ValidationError({"visit_date": ["Visit date is required"]})


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@opinalocal.value_object(part_of="Review")
class Ratings:
    """Per-category star scores. Standard categories have their own fields."""

    food: Integer(min_value=MIN_SCORE, max_value=MAX_SCORE)
    service: Integer(min_value=MIN_SCORE, max_value=MAX_SCORE)
    ambience: Integer(min_value=MIN_SCORE, max_value=MAX_SCORE)
    price: Integer(min_value=MIN_SCORE, max_value=MAX_SCORE)
    custom: Text(default="{}")  # JSON: {category name: score}

    @invariant.post
    def custom_scores_must_be_in_range(self):
        for name, score in self.custom_scores().items():
            _check_score("custom", name, score)

    @classmethod
    def from_maps(cls, standard=None, custom=None):
        standard = validate_standard(standard)
        custom = validate_custom(custom)
        fields = {attr: standard.get(name) for name, attr in STANDARD_CATEGORIES.items()}
        return cls(custom=json.dumps(custom), **fields)

    def standard_scores(self):
        scores = {}
        for name, attr in STANDARD_CATEGORIES.items():
            score = getattr(self, attr)
            if score is not None:
                scores[name] = score
        return scores

    def custom_scores(self):
        return json.loads(self.custom) if self.custom else {}

    def score_for(self, category_name):
        """Standard score if present, otherwise the custom score, otherwise None.

        Names match ignoring case.
        """
        wanted = category_name.casefold()
        for scores in (self.standard_scores(), self.custom_scores()):
            for name, score in scores.items():
                if name.casefold() == wanted:
                    return score
        return None

    def to_dict(self):
        return {"standard": self.standard_scores(), "custom": self.custom_scores()}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@opinalocal.entity(part_of="Review")
class ReviewPhoto:
    """An opaque photo reference (URL or inline data) attached to a review."""

    url: Text(required=True)
    display_order: Integer(default=0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@opinalocal.aggregate
class Review:
    user_id: Identifier(required=True)
    restaurant_id: Identifier(required=True)
    text: Text(required=True)
    photos: HasMany(ReviewPhoto)
    visit_date: Date(required=True)
    ratings: ValueObject(Ratings, required=True)
    overall_rating: Float(default=0.0)
    created_at: DateTime()

    @invariant.post
    def text_must_not_be_blank(self):
        if self.text is not None and not self.text.strip():
            raise ValidationError({"text": ["Review text cannot be empty"]})

    @classmethod
    def submit(cls, user_id, restaurant_id, text, visit_date, standard=None, custom=None, photos=None):
        """Record a review. The overall rating is computed here from both score maps."""
        if not text or not text.strip():
            raise ValidationError({"text": ["Review text cannot be empty"]})

        ratings = Ratings.from_maps(standard, custom)
        overall = review_overall_rating(ratings.standard_scores(), ratings.custom_scores())
        visited_on = coerce_visit_date(visit_date)
        now = datetime.now(UTC)

        review = cls(
            user_id=user_id,
            restaurant_id=restaurant_id,
            text=text,
            visit_date=visited_on,
            ratings=ratings,
            overall_rating=overall,
            created_at=now,
        )

        for order, url in enumerate(photos or []):
            review.add_photos(ReviewPhoto(url=url, display_order=order))

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                restaurant_id=str(restaurant_id),
                user_id=str(user_id),
                overall_rating=overall,
                visit_date=visited_on,
                photo_count=len(photos or []),
                submitted_at=now,
            )
        )
        return review

    def photo_urls(self):
        return [photo.url for photo in sorted(self.photos, key=lambda p: p.display_order)]
