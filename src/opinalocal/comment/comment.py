"""Comment aggregate. A remark left on a review; never edited, only deleted."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Text

from opinalocal.comment.events import CommentAdded
from opinalocal.domain import opinalocal


@opinalocal.aggregate
class Comment:
    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    text: Text(required=True)
    created_at: DateTime()

    @invariant.post
    def text_must_not_be_blank(self):
        if self.text is not None and not self.text.strip():
            raise ValidationError({"text": ["Comment text cannot be empty"]})

    @classmethod
    def add_to(cls, review, user_id, text):
        if not text or not text.strip():
            raise ValidationError({"text": ["Comment text cannot be empty"]})

        now = datetime.now(UTC)
        comment = cls(review_id=str(review.id), user_id=user_id, text=text, created_at=now)
        comment.raise_(
            CommentAdded(
                comment_id=str(comment.id),
                review_id=str(review.id),
                user_id=str(user_id),
                review_author_id=str(review.user_id),
                restaurant_id=str(review.restaurant_id),
                text=text,
                added_at=now,
            )
        )
        return comment
