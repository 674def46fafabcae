"""OpinaLocal HTTP API package."""

from opinalocal.api.routes import (
    category_router,
    comment_router,
    restaurant_router,
    review_router,
    user_router,
)

__all__ = ["user_router", "restaurant_router", "category_router", "review_router", "comment_router"]
