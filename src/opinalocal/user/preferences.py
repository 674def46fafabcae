"""Notification preference management — command and handler."""

from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from opinalocal.domain import opinalocal
from opinalocal.user.user import User


@opinalocal.command(part_of="User")
class UpdateNotificationPreferences:
    """Switch a user's notification preferences on or off. Omitted values are left unchanged."""

    user_id: Identifier(required=True)
    notify_on_comment: Boolean()
    notify_on_new_review: Boolean()
    notify_on_category_approval: Boolean()
    notify_on_newsletter: Boolean()


@opinalocal.command_handler(part_of=User)
class ManagePreferencesHandler:
    @handle(UpdateNotificationPreferences)
    def update_preferences(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_preferences(
            notify_on_comment=command.notify_on_comment,
            notify_on_new_review=command.notify_on_new_review,
            notify_on_category_approval=command.notify_on_category_approval,
            notify_on_newsletter=command.notify_on_newsletter,
        )
        repo.add(user)
