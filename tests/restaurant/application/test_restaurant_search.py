import pytest
from protean import current_domain

from opinalocal.restaurant.queries import list_restaurants, search_restaurants
from opinalocal.restaurant.registration import ValidateRestaurant


@pytest.fixture
def restaurants(register_restaurant):
    return {
        "napoli": register_restaurant(
            name="Pizzaria Napoli", full_address="Rua Augusta, 456 - Bela Vista, São Paulo - SP"
        ),
        "central": register_restaurant(
            name="Café Central", full_address="Av. Paulista, 789 - Bela Vista, São Paulo - SP"
        ),
        "maria": register_restaurant(
            name="Restaurante Dona Maria", full_address="Rua da Consolação, 123 - Consolação, São Paulo - SP"
        ),
    }


class TestSearchRestaurants:
    def test_matches_name_ignoring_case(self, restaurants):
        assert [entry.restaurant.name for entry in search_restaurants("NAPOLI")] == ["Pizzaria Napoli"]

    def test_matches_address(self, restaurants):
        names = [entry.restaurant.name for entry in search_restaurants("bela vista")]
        assert names == ["Café Central", "Pizzaria Napoli"]

    def test_blank_query_finds_nothing(self, restaurants):
        assert search_restaurants("   ") == []

    def test_blank_query_with_filter_lists_that_state(self, restaurants):
        current_domain.process(ValidateRestaurant(restaurant_id=restaurants["maria"]), asynchronous=False)
        assert [entry.restaurant.name for entry in search_restaurants("", validated=True)] == ["Restaurante Dona Maria"]

    def test_filter_by_validation(self, restaurants):
        current_domain.process(ValidateRestaurant(restaurant_id=restaurants["napoli"]), asynchronous=False)
        assert [entry.restaurant.name for entry in search_restaurants("rua", validated=True)] == ["Pizzaria Napoli"]
        assert [entry.restaurant.name for entry in search_restaurants("rua", validated=False)] == ["Restaurante Dona Maria"]

    def test_results_carry_rating_figures(self, restaurants, register_user, submit_review):
        user_id = register_user()
        submit_review(user_id, restaurants["napoli"], standard={"Food": 4, "Price": 3})
        submit_review(user_id, restaurants["napoli"], standard={"Food": 5})

        [listing] = search_restaurants("napoli")
        assert listing.rating.review_count == 2
        assert listing.rating.average == pytest.approx(4.25)

    def test_unreviewed_restaurant_rates_zero(self, restaurants):
        [listing] = search_restaurants("central")
        assert listing.rating.review_count == 0
        assert listing.rating.average == 0.0

    def test_list_is_ordered_by_name(self, restaurants):
        assert [entry.restaurant.name for entry in list_restaurants()] == [
            "Café Central",
            "Pizzaria Napoli",
            "Restaurante Dona Maria",
        ]
