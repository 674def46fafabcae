"""Ownership registry — which users may edit which restaurants.

A RestaurantOwnership row is a plain grant: its presence lets the user edit
the restaurant's profile. A restaurant may have many owners and a user may
own many restaurants; each (user, restaurant) pair is stored at most once.
"""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier
from protean.utils.globals import current_domain

from opinalocal.domain import opinalocal
from opinalocal.restaurant.events import OwnershipGranted
from opinalocal.restaurant.restaurant import Restaurant
from opinalocal.user.user import User
from opinalocal.utils.queries import fetch_all, fetch_first


@opinalocal.aggregate
class RestaurantOwnership:
    user_id: Identifier(required=True)
    restaurant_id: Identifier(required=True)
    granted_at: DateTime()

    @classmethod
    def grant(cls, user_id, restaurant_id):
        now = datetime.now(UTC)
        ownership = cls(user_id=user_id, restaurant_id=restaurant_id, granted_at=now)
        ownership.raise_(
            OwnershipGranted(
                ownership_id=str(ownership.id),
                user_id=str(user_id),
                restaurant_id=str(restaurant_id),
                granted_at=now,
            )
        )
        return ownership


@opinalocal.command(part_of="RestaurantOwnership")
class GrantOwnership:
    user_id: Identifier(required=True)
    restaurant_id: Identifier(required=True)


@opinalocal.command(part_of="RestaurantOwnership")
class RevokeOwnership:
    user_id: Identifier(required=True)
    restaurant_id: Identifier(required=True)


@opinalocal.command_handler(part_of=RestaurantOwnership)
class ManageOwnershipHandler:
    @handle(GrantOwnership)
    def grant_ownership(self, command):
        for aggregate_cls, field_name, identifier in (
            (User, "user_id", command.user_id),
            (Restaurant, "restaurant_id", command.restaurant_id),
        ):
            try:
                current_domain.repository_for(aggregate_cls).get(identifier)
            except ObjectNotFoundError:
                raise ValidationError({field_name: [f"{aggregate_cls.__name__} not found"]}) from None

        existing = _find_grant(command.user_id, command.restaurant_id)
        if existing is not None:
            return str(existing.id)

        ownership = RestaurantOwnership.grant(
            user_id=command.user_id,
            restaurant_id=command.restaurant_id,
        )
        current_domain.repository_for(RestaurantOwnership).add(ownership)
        return str(ownership.id)

    @handle(RevokeOwnership)
    def revoke_ownership(self, command):
        existing = _find_grant(command.user_id, command.restaurant_id)
        if existing is None:
            return
        current_domain.repository_for(RestaurantOwnership)._dao.delete(existing)


def _find_grant(user_id, restaurant_id):
    return fetch_first(RestaurantOwnership, user_id=str(user_id), restaurant_id=str(restaurant_id))


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def is_owner(user_id, restaurant_id) -> bool:
    return _find_grant(user_id, restaurant_id) is not None


def owners_of(restaurant_id) -> list[str]:
    return [str(row.user_id) for row in fetch_all(RestaurantOwnership, restaurant_id=str(restaurant_id))]


def restaurants_owned_by(user_id) -> list:
    repo = current_domain.repository_for(Restaurant)
    return [repo.get(row.restaurant_id) for row in fetch_all(RestaurantOwnership, user_id=str(user_id))]
