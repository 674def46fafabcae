"""User registration and profile maintenance — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from opinalocal.domain import opinalocal
from opinalocal.user.user import _UNSET, User
from opinalocal.utils.queries import fetch_first


@opinalocal.command(part_of="User")
class RegisterUser:
    """Add a person to the directory after their first successful sign-in."""

    external_id: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=200)
    photo_url: String(max_length=2000)


@opinalocal.command(part_of="User")
class UpdateUserProfile:
    user_id: Identifier(required=True)
    name: String(max_length=200)
    photo_url: String(max_length=2000)


@opinalocal.command_handler(part_of=User)
class ManageUsersHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if fetch_first(User, external_id=command.external_id) is not None:
            raise ValidationError({"external_id": ["A user with this external id is already registered"]})
        if fetch_first(User, email=command.email.strip().lower()) is not None:
            raise ValidationError({"email": ["A user with this email is already registered"]})

        user = User.register(
            external_id=command.external_id,
            email=command.email,
            name=command.name,
            photo_url=command.photo_url,
        )
        current_domain.repository_for(User).add(user)
        return str(user.id)

    @handle(UpdateUserProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        user.update_profile(
            name=command.name if command.name is not None else _UNSET,
            photo_url=command.photo_url if command.photo_url is not None else _UNSET,
        )
        repo.add(user)
