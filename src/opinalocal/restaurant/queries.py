"""Read-side lookups over restaurants, with rating figures attached."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from opinalocal.rating.summary import RatingSummary, summarize
from opinalocal.restaurant.restaurant import Restaurant
from opinalocal.review.review import Review
from opinalocal.utils.queries import fetch_all


@dataclass(frozen=True)
class RestaurantListing:
    restaurant: Restaurant
    rating: RatingSummary


def get_restaurant(restaurant_id):
    return current_domain.repository_for(Restaurant).get(restaurant_id)


def _with_ratings(restaurants):
    by_restaurant = {}
    for review in fetch_all(Review):
        by_restaurant.setdefault(str(review.restaurant_id), []).append(review)

    return [
        RestaurantListing(restaurant=r, rating=summarize(by_restaurant.get(str(r.id), [])))
        for r in restaurants
    ]


def list_restaurants(validated=None):
    """Restaurants ordered by name, each with its review count and average rating."""
    filters = {"is_validated": validated} if validated is not None else {}
    restaurants = sorted(fetch_all(Restaurant, **filters), key=lambda r: r.name.casefold())
    return _with_ratings(restaurants)


def search_restaurants(query, validated=None):
    """Case-insensitive match on name or full address.

    A blank query with no validation filter finds nothing; a blank query with
    a filter lists every restaurant in that state.
    """
    needle = (query or "").strip().casefold()
    if not needle and validated is None:
        return []

    listings = list_restaurants(validated)
    if not needle:
        return listings
    return [
        listing
        for listing in listings
        if needle in listing.restaurant.name.casefold()
        or needle in listing.restaurant.address.full_address.casefold()
    ]
