"""Rating figures shown on a restaurant profile, assembled on every read."""

from dataclasses import dataclass

from opinalocal.category.queries import approved_category_names
from opinalocal.rating.aggregator import (
    categories_in_use,
    category_average,
    overall_rating,
    review_count,
)
from opinalocal.review.queries import reviews_for_restaurant


@dataclass(frozen=True)
class CategoryAverage:
    category_name: str
    average: float


@dataclass(frozen=True)
class RatingSummary:
    average: float
    review_count: int


def summarize(reviews) -> RatingSummary:
    return RatingSummary(average=overall_rating(reviews), review_count=review_count(reviews))


def restaurant_rating(restaurant_id) -> RatingSummary:
    return summarize(reviews_for_restaurant(restaurant_id))


def assemble_category_summary(restaurant_id) -> list[CategoryAverage]:
    """Categories used by the restaurant's reviews that are approved right now.

    A category rejected after reviews used it drops out of the summary; the
    review scores themselves are left alone. Rows carry the registry's spelling
    of the name, whatever case reviewers used.
    """
    reviews = reviews_for_restaurant(restaurant_id)
    approved = {name.casefold(): name for name in approved_category_names()}

    return [
        CategoryAverage(category_name=approved[name.casefold()], average=category_average(reviews, name))
        for name in categories_in_use(reviews)
        if name.casefold() in approved
    ]
