"""Rating aggregation over a restaurant's reviews.

Every figure is recomputed from the reviews handed in; nothing is cached or
stored. Empty input yields zero, never an error.

Reviews are read through two attributes: ``overall_rating`` and ``ratings``,
whose ``standard_scores()`` and ``custom_scores()`` return name → score maps
and whose ``score_for(name)`` picks one score with standard precedence.
"""


def _mean(values):
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def review_overall_rating(standard, custom) -> float:
    """Unweighted mean of every score across both maps; 0.0 when both are empty."""
    return _mean([*(standard or {}).values(), *(custom or {}).values()])


def overall_rating(reviews) -> float:
    """Mean of each review's stored overall rating. Not rounded."""
    return _mean(review.overall_rating or 0.0 for review in reviews)


def category_average(reviews, category_name) -> float:
    """Average score for one category, matching its name ignoring case.

    A standard score wins over a custom score of the same name within a review.
    """
    scores = (review.ratings.score_for(category_name) if review.ratings else None for review in reviews)
    return _mean(score for score in scores if score is not None)


def review_count(reviews) -> int:
    return len(list(reviews))


def categories_in_use(reviews) -> list[str]:
    """Category names present in any review, in discovery order.

    Names that differ only in case count once, under the first spelling seen.
    """
    seen = {}
    for review in reviews:
        if not review.ratings:
            continue
        for name in [*review.ratings.standard_scores(), *review.ratings.custom_scores()]:
            seen.setdefault(name.casefold(), name)
    return list(seen.values())
