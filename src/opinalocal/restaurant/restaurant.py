"""Restaurant aggregate with Address and GeoCoordinates value objects.

Restaurants are created unvalidated by any signed-in user and become
discoverable once an administrator validates them. Validation is one-way:
a validated restaurant never goes back to unvalidated.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, String, ValueObject

from opinalocal.domain import opinalocal
from opinalocal.restaurant.events import (
    RestaurantDetailsUpdated,
    RestaurantRegistered,
    RestaurantValidated,
)

_UNSET = object()


@opinalocal.value_object(part_of="Restaurant")
class Address:
    """Structured postal address plus the single-line form shown to users."""

    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    full_address: String(required=True, max_length=500)


@opinalocal.value_object(part_of="Restaurant")
class GeoCoordinates:
    """Latitude/longitude pair. Partial coordinates are rejected."""

    latitude: Float(min_value=-90.0, max_value=90.0)
    longitude: Float(min_value=-180.0, max_value=180.0)

    @invariant.post
    def both_coordinates_required(self):
        if self.latitude is None or self.longitude is None:
            raise ValidationError({"location": ["Both latitude and longitude are required"]})


@opinalocal.aggregate
class Restaurant:
    name: String(required=True, max_length=200)
    address: ValueObject(Address, required=True)
    location: ValueObject(GeoCoordinates)
    photo_url: String(max_length=2000)
    is_validated: Boolean(default=False)
    created_by: Identifier(required=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Restaurant name cannot be empty"]})

    @classmethod
    def register(cls, name, address, created_by, location=None, photo_url=None):
        """Register a restaurant. It always starts unvalidated."""
        now = datetime.now(UTC)

        restaurant = cls(
            name=name,
            address=address,
            location=location,
            photo_url=photo_url,
            is_validated=False,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        restaurant.raise_(
            RestaurantRegistered(
                restaurant_id=str(restaurant.id),
                name=name,
                full_address=address.full_address,
                latitude=location.latitude if location else None,
                longitude=location.longitude if location else None,
                created_by=str(created_by),
                registered_at=now,
            )
        )
        return restaurant

    def validate(self):
        """Mark the restaurant as validated. Repeated calls are no-ops."""
        if self.is_validated:
            return

        now = datetime.now(UTC)
        self.is_validated = True
        self.updated_at = now

        self.raise_(RestaurantValidated(restaurant_id=str(self.id), validated_at=now))

    def update_details(self, updated_by, name=_UNSET, address=_UNSET, photo_url=_UNSET):
        now = datetime.now(UTC)

        if name is not _UNSET:
            self.name = name
        if address is not _UNSET:
            self.address = address
        if photo_url is not _UNSET:
            self.photo_url = photo_url
        self.updated_at = now

        self.raise_(
            RestaurantDetailsUpdated(
                restaurant_id=str(self.id),
                updated_by=str(updated_by),
                name=self.name,
                full_address=self.address.full_address,
                photo_url=self.photo_url,
                updated_at=now,
            )
        )
