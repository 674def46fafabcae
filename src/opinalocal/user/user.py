"""User aggregate, the platform's view of a signed-in person.

Users are created the first time the external identity provider vouches
for them. Besides the profile, a user carries four independent notification
preferences that gate the side-channel messages sent on their behalf.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from opinalocal.domain import opinalocal
from opinalocal.user.events import (
    NotificationPreferencesUpdated,
    UserProfileUpdated,
    UserPromotedToAdmin,
    UserRegistered,
)

_UNSET = object()


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


class NotificationPreference(Enum):
    """Maps each preference to the User field that stores it."""

    COMMENT = "notify_on_comment"
    NEW_REVIEW = "notify_on_new_review"
    CATEGORY_APPROVAL = "notify_on_category_approval"
    NEWSLETTER = "notify_on_newsletter"


@opinalocal.aggregate
class User:
    external_id: String(required=True, max_length=255, unique=True)
    email: String(required=True, max_length=254, unique=True)
    name: String(required=True, max_length=200)
    photo_url: String(max_length=2000)
    role: String(choices=UserRole, default=UserRole.USER.value)

    notify_on_comment: Boolean(default=True)
    notify_on_new_review: Boolean(default=True)
    notify_on_category_approval: Boolean(default=True)
    notify_on_newsletter: Boolean(default=False)

    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        if self.email is None:
            return
        local, _, domain_part = self.email.partition("@")
        if not local or not domain_part or "@" in domain_part or " " in self.email:
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Name cannot be empty"]})

    @classmethod
    def register(cls, external_id, email, name, photo_url=None):
        now = datetime.now(UTC)

        user = cls(
            external_id=external_id,
            email=email.strip().lower(),
            name=name,
            photo_url=photo_url,
            role=UserRole.USER.value,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                external_id=external_id,
                email=user.email,
                name=name,
                registered_at=now,
            )
        )
        return user

    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    def update_profile(self, name=_UNSET, photo_url=_UNSET):
        now = datetime.now(UTC)

        if name is not _UNSET:
            self.name = name
        if photo_url is not _UNSET:
            self.photo_url = photo_url
        self.updated_at = now

        self.raise_(
            UserProfileUpdated(
                user_id=str(self.id),
                name=self.name,
                photo_url=self.photo_url,
                updated_at=now,
            )
        )

    def update_preferences(
        self,
        notify_on_comment=None,
        notify_on_new_review=None,
        notify_on_category_approval=None,
        notify_on_newsletter=None,
    ):
        """Update notification preferences. Pass None to keep a preference unchanged."""
        changes = {
            NotificationPreference.COMMENT.value: notify_on_comment,
            NotificationPreference.NEW_REVIEW.value: notify_on_new_review,
            NotificationPreference.CATEGORY_APPROVAL.value: notify_on_category_approval,
            NotificationPreference.NEWSLETTER.value: notify_on_newsletter,
        }
        if all(value is None for value in changes.values()):
            raise ValidationError({"preferences": ["At least one preference must be provided"]})

        now = datetime.now(UTC)
        for field_name, value in changes.items():
            if value is not None:
                setattr(self, field_name, value)
        self.updated_at = now

        self.raise_(
            NotificationPreferencesUpdated(
                user_id=str(self.id),
                notify_on_comment=self.notify_on_comment,
                notify_on_new_review=self.notify_on_new_review,
                notify_on_category_approval=self.notify_on_category_approval,
                notify_on_newsletter=self.notify_on_newsletter,
                updated_at=now,
            )
        )

    def is_subscribed_to(self, preference):
        """True when the given NotificationPreference (or its value) is switched on."""
        return bool(getattr(self, NotificationPreference(preference).value))

    def grant_admin(self):
        """Promote to administrator. Only reachable from seeding and the management CLI."""
        if self.is_admin():
            return

        now = datetime.now(UTC)
        self.role = UserRole.ADMIN.value
        self.updated_at = now

        self.raise_(UserPromotedToAdmin(user_id=str(self.id), promoted_at=now))
