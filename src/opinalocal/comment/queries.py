"""Read-side lookups over comments."""

from dataclasses import dataclass

from opinalocal.comment.comment import Comment
from opinalocal.user.user import User
from opinalocal.utils.queries import fetch_all, fetch_by_ids


@dataclass(frozen=True)
class CommentDetails:
    comment: Comment
    author: User | None


def comments_for_review(review_id):
    """Comments on a review, newest first."""
    return sorted(fetch_all(Comment, review_id=review_id), key=lambda c: c.created_at, reverse=True)


def with_authors(comments) -> list[CommentDetails]:
    authors = fetch_by_ids(User, (c.user_id for c in comments))
    return [CommentDetails(comment=c, author=authors.get(str(c.user_id))) for c in comments]
