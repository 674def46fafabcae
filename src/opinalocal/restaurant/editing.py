"""UpdateRestaurant — owners (and administrators) edit a restaurant's profile.

The requester is the authenticated user making the call; it is checked
against the ownership registry before anything is changed.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from opinalocal.domain import opinalocal
from opinalocal.restaurant.ownership import is_owner
from opinalocal.restaurant.restaurant import _UNSET, Address, Restaurant
from opinalocal.shared.errors import ForbiddenError
from opinalocal.user.user import User

_ADDRESS_FIELDS = ("street", "city", "state", "postal_code", "full_address")


@opinalocal.command(part_of="Restaurant")
class UpdateRestaurant:
    restaurant_id: Identifier(required=True)
    requester_id: Identifier(required=True)
    name: String(max_length=200)
    street: String(max_length=255)
    city: String(max_length=100)
    state: String(max_length=100)
    postal_code: String(max_length=20)
    full_address: String(max_length=500)
    photo_url: String(max_length=2000)


def can_edit(requester_id, restaurant_id) -> bool:
    if is_owner(requester_id, restaurant_id):
        return True
    try:
        requester = current_domain.repository_for(User).get(requester_id)
    except ObjectNotFoundError:
        return False
    return requester.is_admin()


@opinalocal.command_handler(part_of=Restaurant)
class UpdateRestaurantHandler:
    @handle(UpdateRestaurant)
    def update_restaurant(self, command):
        repo = current_domain.repository_for(Restaurant)
        restaurant = repo.get(command.restaurant_id)

        if not can_edit(command.requester_id, restaurant.id):
            raise ForbiddenError("Only an owner of this restaurant can edit it")

        address = _UNSET
        if any(getattr(command, field) is not None for field in _ADDRESS_FIELDS):
            # Address is replaced wholesale, so every part must be supplied
            address = Address(**{field: getattr(command, field) for field in _ADDRESS_FIELDS})

        restaurant.update_details(
            updated_by=command.requester_id,
            name=command.name if command.name is not None else _UNSET,
            address=address,
            photo_url=command.photo_url if command.photo_url is not None else _UNSET,
        )
        repo.add(restaurant)
