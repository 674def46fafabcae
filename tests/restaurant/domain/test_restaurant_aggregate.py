"""Tests for the Restaurant aggregate and its value objects."""

import pytest
from protean.exceptions import ValidationError

from opinalocal.restaurant.events import RestaurantDetailsUpdated, RestaurantValidated
from opinalocal.restaurant.restaurant import Address, GeoCoordinates, Restaurant


def _address(**overrides):
    fields = {
        "street": "Rua XV de Novembro, 50",
        "city": "Curitiba",
        "state": "PR",
        "postal_code": "80020-310",
        "full_address": "Rua XV de Novembro, 50 - Centro, Curitiba - PR",
    }
    fields.update(overrides)
    return Address(**fields)


def _restaurant(**overrides):
    fields = {"name": "Bar do Alemão", "address": _address(), "created_by": "user-1"}
    fields.update(overrides)
    restaurant = Restaurant.register(**fields)
    restaurant._events.clear()
    return restaurant


class TestRegisterRestaurant:
    def test_starts_unvalidated(self):
        assert _restaurant().is_validated is False

    def test_keeps_location_and_photo(self):
        restaurant = _restaurant(
            location=GeoCoordinates(latitude=-25.43, longitude=-49.27),
            photo_url="https://img/bar.jpg",
        )
        assert restaurant.location.latitude == -25.43
        assert restaurant.photo_url == "https://img/bar.jpg"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            _restaurant(name="  ")


class TestValueObjects:
    def test_address_requires_every_part(self):
        with pytest.raises(ValidationError):
            Address(street="Rua A", city="Curitiba", state="PR", postal_code="80000-000")

    def test_partial_coordinates_rejected(self):
        with pytest.raises(ValidationError):
            GeoCoordinates(latitude=-25.43)

    @pytest.mark.parametrize("latitude,longitude", [(-91, 0), (91, 0), (0, 181), (0, -181)])
    def test_coordinates_range_checked(self, latitude, longitude):
        with pytest.raises(ValidationError):
            GeoCoordinates(latitude=latitude, longitude=longitude)


class TestValidateRestaurant:
    def test_validate_sets_flag(self):
        restaurant = _restaurant()
        restaurant.validate()
        assert restaurant.is_validated is True
        assert isinstance(restaurant._events[0], RestaurantValidated)

    def test_validate_twice_is_a_no_op(self):
        restaurant = _restaurant()
        restaurant.validate()
        restaurant.validate()
        assert restaurant.is_validated is True
        assert len(restaurant._events) == 1


class TestUpdateDetails:
    def test_update_name_only(self):
        restaurant = _restaurant()
        original_address = restaurant.address
        restaurant.update_details(updated_by="user-1", name="Bar do Alemão II")
        assert restaurant.name == "Bar do Alemão II"
        assert restaurant.address == original_address
        assert isinstance(restaurant._events[0], RestaurantDetailsUpdated)

    def test_update_address(self):
        restaurant = _restaurant()
        restaurant.update_details(updated_by="user-1", address=_address(street="Rua Nova, 1"))
        assert restaurant.address.street == "Rua Nova, 1"

    def test_update_keeps_validation(self):
        restaurant = _restaurant()
        restaurant.validate()
        restaurant.update_details(updated_by="user-1", photo_url="https://img/new.jpg")
        assert restaurant.is_validated is True
