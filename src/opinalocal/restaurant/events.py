"""Domain events for the Restaurant and RestaurantOwnership aggregates."""

from protean.fields import DateTime, Float, Identifier, String

from opinalocal.domain import opinalocal


@opinalocal.event(part_of="Restaurant")
class RestaurantRegistered:
    """A user submitted a new restaurant; it awaits administrative validation."""

    __version__ = 1

    restaurant_id: Identifier(required=True)
    name: String(required=True)
    full_address: String(required=True)
    latitude: Float()
    longitude: Float()
    created_by: Identifier(required=True)
    registered_at: DateTime(required=True)


@opinalocal.event(part_of="Restaurant")
class RestaurantValidated:
    """An administrator made the restaurant discoverable."""

    __version__ = 1

    restaurant_id: Identifier(required=True)
    validated_at: DateTime(required=True)


@opinalocal.event(part_of="Restaurant")
class RestaurantDetailsUpdated:
    __version__ = 1

    restaurant_id: Identifier(required=True)
    updated_by: Identifier(required=True)
    name: String(required=True)
    full_address: String(required=True)
    photo_url: String()
    updated_at: DateTime(required=True)


@opinalocal.event(part_of="RestaurantOwnership")
class OwnershipGranted:
    __version__ = 1

    ownership_id: Identifier(required=True)
    user_id: Identifier(required=True)
    restaurant_id: Identifier(required=True)
    granted_at: DateTime(required=True)
