"""AddComment and DeleteComment — commands and handler.

Only administrators delete comments; that check happens before the command
is issued. Deletion is permanent.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from opinalocal.comment.comment import Comment
from opinalocal.domain import opinalocal
from opinalocal.review.review import Review
from opinalocal.user.user import User

logger = structlog.get_logger(__name__)


@opinalocal.command(part_of="Comment")
class AddComment:
    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    text: Text(required=True)


@opinalocal.command(part_of="Comment")
class DeleteComment:
    comment_id: Identifier(required=True)


@opinalocal.command_handler(part_of=Comment)
class ManageCommentsHandler:
    @handle(AddComment)
    def add_comment(self, command):
        try:
            review = current_domain.repository_for(Review).get(command.review_id)
        except ObjectNotFoundError:
            raise ValidationError({"review_id": [f"Review {command.review_id} does not exist"]}) from None
        try:
            current_domain.repository_for(User).get(command.user_id)
        except ObjectNotFoundError:
            raise ValidationError({"user_id": [f"User {command.user_id} does not exist"]}) from None

        comment = Comment.add_to(review, user_id=command.user_id, text=command.text)
        current_domain.repository_for(Comment).add(comment)
        return str(comment.id)

    @handle(DeleteComment)
    def delete_comment(self, command):
        repo = current_domain.repository_for(Comment)
        comment = repo.get(command.comment_id)
        repo._dao.delete(comment)
        logger.info("Comment deleted", comment_id=str(comment.id), review_id=str(comment.review_id))
