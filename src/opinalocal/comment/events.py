"""Domain events for the Comment aggregate."""

from protean.fields import DateTime, Identifier, Text

from opinalocal.domain import opinalocal


@opinalocal.event(part_of="Comment")
class CommentAdded:
    """Someone commented on a review. Carries the review's author for notification."""

    __version__ = 1

    comment_id: Identifier(required=True)
    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    review_author_id: Identifier(required=True)
    restaurant_id: Identifier(required=True)
    text: Text(required=True)
    added_at: DateTime(required=True)
