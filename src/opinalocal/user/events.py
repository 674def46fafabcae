"""Domain events for the User aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from opinalocal.domain import opinalocal


@opinalocal.event(part_of="User")
class UserRegistered:
    """A person signed in for the first time and was added to the directory."""

    __version__ = 1

    user_id: Identifier(required=True)
    external_id: String(required=True)
    email: String(required=True)
    name: String(required=True)
    registered_at: DateTime(required=True)


@opinalocal.event(part_of="User")
class UserProfileUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    photo_url: String()
    updated_at: DateTime(required=True)


@opinalocal.event(part_of="User")
class NotificationPreferencesUpdated:
    """A user switched one or more notification preferences on or off."""

    __version__ = 1

    user_id: Identifier(required=True)
    notify_on_comment: Boolean(required=True)
    notify_on_new_review: Boolean(required=True)
    notify_on_category_approval: Boolean(required=True)
    notify_on_newsletter: Boolean(required=True)
    updated_at: DateTime(required=True)


@opinalocal.event(part_of="User")
class UserPromotedToAdmin:
    __version__ = 1

    user_id: Identifier(required=True)
    promoted_at: DateTime(required=True)
