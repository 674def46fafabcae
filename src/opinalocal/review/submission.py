"""SubmitReview — record a user's rating of a restaurant visit.

Score maps and photos arrive as JSON text. Any overall rating the client
computed is never accepted; the aggregate derives it.
"""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from opinalocal.domain import opinalocal
from opinalocal.restaurant.restaurant import Restaurant
from opinalocal.review.review import Review
from opinalocal.user.user import User


@opinalocal.command(part_of="Review")
class SubmitReview:
    user_id: Identifier(required=True)
    restaurant_id: Identifier(required=True)
    text: Text(required=True)
    visit_date: String(required=True, max_length=40)  # ISO date
    standard: Text()  # JSON: {"Food": 5, ...}
    custom: Text()  # JSON: {"Wi-Fi": 4, ...}
    photos: Text()  # JSON array of photo references


def _load_json(field, raw, default):
    if not raw:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError({field: ["Malformed JSON"]}) from None


def _require(aggregate_cls, identifier, field, label):
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise ValidationError({field: [f"{label} {identifier} does not exist"]}) from None


@opinalocal.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        _require(User, command.user_id, "user_id", "User")
        _require(Restaurant, command.restaurant_id, "restaurant_id", "Restaurant")

        photos = _load_json("photos", command.photos, [])
        if not isinstance(photos, list) or not all(isinstance(p, str) and p for p in photos):
            raise ValidationError({"photos": ["Photos must be a list of non-empty strings"]})

        review = Review.submit(
            user_id=command.user_id,
            restaurant_id=command.restaurant_id,
            text=command.text,
            visit_date=command.visit_date,
            standard=_load_json("standard", command.standard, {}),
            custom=_load_json("custom", command.custom, {}),
            photos=photos,
        )
        current_domain.repository_for(Review).add(review)
        return str(review.id)
