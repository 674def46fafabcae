"""OpinaLocal domain: restaurants, reviews, ratings and moderation.

Owns the rating categories and their moderation lifecycle, restaurant
registration and validation, ownership grants, reviews with multi-category
ratings, comments, and the notification side channel that reacts to them.
"""

from protean.domain import Domain

from opinalocal.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

opinalocal = Domain(name="opinalocal")
