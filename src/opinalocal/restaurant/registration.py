"""RegisterRestaurant and ValidateRestaurant — commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from opinalocal.domain import opinalocal
from opinalocal.restaurant.restaurant import Address, GeoCoordinates, Restaurant


@opinalocal.command(part_of="Restaurant")
class RegisterRestaurant:
    """Submit a restaurant for listing. Validation state is not accepted from callers."""

    name: String(required=True, max_length=200)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    full_address: String(required=True, max_length=500)
    latitude: Float()
    longitude: Float()
    photo_url: String(max_length=2000)
    created_by: Identifier(required=True)


@opinalocal.command(part_of="Restaurant")
class ValidateRestaurant:
    restaurant_id: Identifier(required=True)


@opinalocal.command_handler(part_of=Restaurant)
class RestaurantRegistrationHandler:
    @handle(RegisterRestaurant)
    def register_restaurant(self, command):
        location = None
        if command.latitude is not None or command.longitude is not None:
            location = GeoCoordinates(latitude=command.latitude, longitude=command.longitude)

        restaurant = Restaurant.register(
            name=command.name,
            address=Address(
                street=command.street,
                city=command.city,
                state=command.state,
                postal_code=command.postal_code,
                full_address=command.full_address,
            ),
            location=location,
            photo_url=command.photo_url,
            created_by=command.created_by,
        )
        current_domain.repository_for(Restaurant).add(restaurant)
        return str(restaurant.id)

    @handle(ValidateRestaurant)
    def validate_restaurant(self, command):
        repo = current_domain.repository_for(Restaurant)
        restaurant = repo.get(command.restaurant_id)
        restaurant.validate()
        repo.add(restaurant)
