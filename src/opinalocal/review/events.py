"""Domain events for the Review aggregate."""

from protean.fields import Date, DateTime, Float, Identifier, Integer

from opinalocal.domain import opinalocal


@opinalocal.event(part_of="Review")
class ReviewSubmitted:
    """A user rated a restaurant. Other reviewers of the restaurant may be told."""

    __version__ = 1

    review_id: Identifier(required=True)
    restaurant_id: Identifier(required=True)
    user_id: Identifier(required=True)
    overall_rating: Float(required=True)
    visit_date: Date()
    photo_count: Integer(default=0)
    submitted_at: DateTime(required=True)
