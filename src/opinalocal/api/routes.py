"""FastAPI routes for OpinaLocal.

Writes translate Pydantic schemas into Protean commands; reads call the
query functions of each package. The caller's identity is supplied by the
identity provider upstream and arrives here as a plain user id.
"""

import json

from fastapi import APIRouter, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from opinalocal.api.schemas import (
    AddCommentRequest,
    AuthorSummary,
    CategoryAverageResponse,
    CategoryIdResponse,
    CategoryResponse,
    CommentIdResponse,
    CommentResponse,
    CreateCategoryRequest,
    OwnershipResponse,
    PushSubscriptionRequest,
    RatingSummaryResponse,
    RegisterRestaurantRequest,
    RegisterUserRequest,
    RestaurantIdResponse,
    RestaurantResponse,
    RestaurantSummary,
    ReviewIdResponse,
    ReviewResponse,
    SetCategoryStatusRequest,
    StatusResponse,
    SubmitReviewRequest,
    SubscriptionIdResponse,
    UpdatePreferencesRequest,
    UpdateProfileRequest,
    UpdateRestaurantRequest,
    UserIdResponse,
    UserResponse,
)
from opinalocal.category.category import Category
from opinalocal.category.creation import CreateCategory
from opinalocal.category.moderation import SetCategoryStatus
from opinalocal.category.queries import list_categories, search_categories
from opinalocal.comment.management import AddComment, DeleteComment
from opinalocal.comment.queries import comments_for_review, with_authors
from opinalocal.rating.summary import assemble_category_summary, restaurant_rating
from opinalocal.restaurant.editing import UpdateRestaurant
from opinalocal.restaurant.ownership import GrantOwnership, RevokeOwnership, restaurants_owned_by
from opinalocal.restaurant.queries import get_restaurant, list_restaurants, search_restaurants
from opinalocal.restaurant.registration import RegisterRestaurant, ValidateRestaurant
from opinalocal.review.queries import (
    get_review,
    recent_reviews,
    reviews_by_user,
    reviews_for_restaurant,
    reviews_in_timeframe,
    with_details,
)
from opinalocal.review.submission import SubmitReview
from opinalocal.user.preferences import UpdateNotificationPreferences
from opinalocal.user.push import SavePushSubscription
from opinalocal.user.queries import find_user_by_email, find_user_by_external_id, get_user
from opinalocal.user.registration import RegisterUser, UpdateUserProfile

user_router = APIRouter(prefix="/users", tags=["users"])
restaurant_router = APIRouter(prefix="/restaurants", tags=["restaurants"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
comment_router = APIRouter(prefix="/comments", tags=["comments"])


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------
def _user(user) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        external_id=user.external_id,
        email=user.email,
        name=user.name,
        photo_url=user.photo_url,
        role=user.role,
        notify_on_comment=user.notify_on_comment,
        notify_on_new_review=user.notify_on_new_review,
        notify_on_category_approval=user.notify_on_category_approval,
        notify_on_newsletter=user.notify_on_newsletter,
    )


def _restaurant(restaurant, rating=None) -> RestaurantResponse:
    address = restaurant.address
    location = restaurant.location
    return RestaurantResponse(
        id=str(restaurant.id),
        name=restaurant.name,
        address={
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "postal_code": address.postal_code,
            "full_address": address.full_address,
        },
        location={"latitude": location.latitude, "longitude": location.longitude} if location else None,
        photo_url=restaurant.photo_url,
        is_validated=restaurant.is_validated,
        created_by=str(restaurant.created_by),
        average_rating=rating.average if rating else None,
        review_count=rating.review_count if rating else None,
    )


def _category(category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        created_by=category.created_by,
        status=category.status,
        created_at=category.created_at,
    )


def _author(user) -> AuthorSummary | None:
    if user is None:
        return None
    return AuthorSummary(id=str(user.id), name=user.name, photo_url=user.photo_url)


def _restaurant_summary(restaurant) -> RestaurantSummary | None:
    if restaurant is None:
        return None
    return RestaurantSummary(
        id=str(restaurant.id), name=restaurant.name, full_address=restaurant.address.full_address
    )


def _review(details) -> ReviewResponse:
    review = details.review
    return ReviewResponse(
        id=str(review.id),
        user_id=str(review.user_id),
        restaurant_id=str(review.restaurant_id),
        author=_author(details.author),
        restaurant=_restaurant_summary(details.restaurant),
        text=review.text,
        photos=review.photo_urls(),
        visit_date=review.visit_date,
        ratings=review.ratings.to_dict(),
        overall_rating=review.overall_rating,
        created_at=review.created_at,
    )


def _comment(details) -> CommentResponse:
    comment = details.comment
    return CommentResponse(
        id=str(comment.id),
        review_id=str(comment.review_id),
        user_id=str(comment.user_id),
        author=_author(details.author),
        text=comment.text,
        created_at=comment.created_at,
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    """Register a user signed in through the identity provider."""
    command = RegisterUser(
        external_id=body.external_id,
        email=body.email,
        name=body.name,
        photo_url=body.photo_url,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=user_id)


@user_router.get("/external/{external_id}", response_model=UserResponse)
async def get_user_by_external_id(external_id: str) -> UserResponse:
    """Look up a user by identity provider id."""
    user = find_user_by_external_id(external_id)
    if user is None:
        raise ObjectNotFoundError(f"User with external id `{external_id}` does not exist")
    return _user(user)


@user_router.get("/email/{email}", response_model=UserResponse)
async def get_user_by_email(email: str) -> UserResponse:
    """Look up a user by email address."""
    user = find_user_by_email(email)
    if user is None:
        raise ObjectNotFoundError(f"User with email `{email}` does not exist")
    return _user(user)


@user_router.get("/{user_id}", response_model=UserResponse)
async def get_user_profile(user_id: str) -> UserResponse:
    """Get a user profile."""
    return _user(get_user(user_id))


@user_router.patch("/{user_id}", response_model=UserResponse)
async def update_profile(user_id: str, body: UpdateProfileRequest) -> UserResponse:
    """Update a user's name or photo."""
    command = UpdateUserProfile(user_id=user_id, name=body.name, photo_url=body.photo_url)
    current_domain.process(command, asynchronous=False)
    return _user(get_user(user_id))


@user_router.patch("/{user_id}/preferences", response_model=UserResponse)
async def update_preferences(user_id: str, body: UpdatePreferencesRequest) -> UserResponse:
    """Change which notifications a user receives."""
    command = UpdateNotificationPreferences(
        user_id=user_id,
        notify_on_comment=body.notify_on_comment,
        notify_on_new_review=body.notify_on_new_review,
        notify_on_category_approval=body.notify_on_category_approval,
        notify_on_newsletter=body.notify_on_newsletter,
    )
    current_domain.process(command, asynchronous=False)
    return _user(get_user(user_id))


@user_router.post("/{user_id}/push-subscriptions", status_code=201, response_model=SubscriptionIdResponse)
async def save_push_subscription(user_id: str, body: PushSubscriptionRequest) -> SubscriptionIdResponse:
    """Store a web push subscription for a user."""
    command = SavePushSubscription(user_id=user_id, subscription=json.dumps(body.subscription))
    subscription_id = current_domain.process(command, asynchronous=False)
    return SubscriptionIdResponse(subscription_id=subscription_id)


@user_router.get("/{user_id}/restaurants", response_model=list[RestaurantResponse])
async def owned_restaurants(user_id: str) -> list[RestaurantResponse]:
    """List the restaurants a user owns."""
    return [_restaurant(r) for r in restaurants_owned_by(user_id)]


# ---------------------------------------------------------------------------
# Restaurants
# ---------------------------------------------------------------------------
@restaurant_router.post("", status_code=201, response_model=RestaurantIdResponse)
async def register_restaurant(body: RegisterRestaurantRequest) -> RestaurantIdResponse:
    """Register a new restaurant, unvalidated."""
    command = RegisterRestaurant(
        name=body.name,
        street=body.address.street,
        city=body.address.city,
        state=body.address.state,
        postal_code=body.address.postal_code,
        full_address=body.address.full_address,
        latitude=body.location.latitude if body.location else None,
        longitude=body.location.longitude if body.location else None,
        photo_url=body.photo_url,
        created_by=body.created_by,
    )
    restaurant_id = current_domain.process(command, asynchronous=False)
    return RestaurantIdResponse(restaurant_id=restaurant_id)


@restaurant_router.get("", response_model=list[RestaurantResponse])
async def list_all_restaurants(validated: bool | None = None) -> list[RestaurantResponse]:
    """List restaurants with their ratings."""
    return [_restaurant(item.restaurant, item.rating) for item in list_restaurants(validated)]


@restaurant_router.get("/search", response_model=list[RestaurantResponse])
async def search(q: str = "", validated: bool | None = None) -> list[RestaurantResponse]:
    """Search restaurants by name or address."""
    return [_restaurant(item.restaurant, item.rating) for item in search_restaurants(q, validated)]


@restaurant_router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant_profile(restaurant_id: str) -> RestaurantResponse:
    """Get a restaurant with its rating."""
    restaurant = get_restaurant(restaurant_id)
    return _restaurant(restaurant, restaurant_rating(restaurant_id))


@restaurant_router.get("/{restaurant_id}/rating", response_model=RatingSummaryResponse)
async def get_restaurant_rating(restaurant_id: str) -> RatingSummaryResponse:
    """Get a restaurant's average rating and review count."""
    get_restaurant(restaurant_id)
    summary = restaurant_rating(restaurant_id)
    return RatingSummaryResponse(average_rating=summary.average, review_count=summary.review_count)


@restaurant_router.get("/{restaurant_id}/category-summary", response_model=list[CategoryAverageResponse])
async def category_summary(restaurant_id: str) -> list[CategoryAverageResponse]:
    """Get per-category averages for approved categories."""
    get_restaurant(restaurant_id)
    return [
        CategoryAverageResponse(category_name=row.category_name, average=row.average)
        for row in assemble_category_summary(restaurant_id)
    ]


@restaurant_router.patch("/{restaurant_id}/validate", response_model=RestaurantResponse)
async def validate_restaurant(restaurant_id: str) -> RestaurantResponse:
    """Mark a restaurant as validated."""
    current_domain.process(ValidateRestaurant(restaurant_id=restaurant_id), asynchronous=False)
    return _restaurant(get_restaurant(restaurant_id))


@restaurant_router.patch("/{restaurant_id}", response_model=RestaurantResponse)
async def update_restaurant(restaurant_id: str, body: UpdateRestaurantRequest) -> RestaurantResponse:
    """Edit a restaurant profile as its owner or an admin."""
    address = body.address
    command = UpdateRestaurant(
        restaurant_id=restaurant_id,
        requester_id=body.requester_id,
        name=body.name,
        street=address.street if address else None,
        city=address.city if address else None,
        state=address.state if address else None,
        postal_code=address.postal_code if address else None,
        full_address=address.full_address if address else None,
        photo_url=body.photo_url,
    )
    current_domain.process(command, asynchronous=False)
    return _restaurant(get_restaurant(restaurant_id))


@restaurant_router.post("/{restaurant_id}/owners/{user_id}", status_code=201, response_model=OwnershipResponse)
async def grant_ownership(restaurant_id: str, user_id: str) -> OwnershipResponse:
    """Make a user an owner of a restaurant."""
    command = GrantOwnership(user_id=user_id, restaurant_id=restaurant_id)
    ownership_id = current_domain.process(command, asynchronous=False)
    return OwnershipResponse(ownership_id=ownership_id)


@restaurant_router.delete("/{restaurant_id}/owners/{user_id}", response_model=StatusResponse)
async def revoke_ownership(restaurant_id: str, user_id: str) -> StatusResponse:
    """Remove a user's ownership of a restaurant."""
    current_domain.process(RevokeOwnership(user_id=user_id, restaurant_id=restaurant_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
@category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    """Suggest a new rating category."""
    command = CreateCategory(name=body.name, created_by=body.created_by)
    category_id = current_domain.process(command, asynchronous=False)
    category = current_domain.repository_for(Category).get(category_id)
    return CategoryIdResponse(category_id=category_id, status=category.status)


@category_router.get("", response_model=list[CategoryResponse])
async def get_categories(status: str | None = None) -> list[CategoryResponse]:
    """List rating categories, optionally by status."""
    return [_category(c) for c in list_categories(status)]


@category_router.get("/search", response_model=list[CategoryResponse])
async def find_categories(q: str = "", status: str | None = None) -> list[CategoryResponse]:
    """Search rating categories by name."""
    return [_category(c) for c in search_categories(q, status)]


@category_router.patch("/{category_id}/status", response_model=CategoryResponse)
async def set_category_status(category_id: str, body: SetCategoryStatusRequest) -> CategoryResponse:
    """Approve or reject a rating category."""
    command = SetCategoryStatus(category_id=category_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return _category(current_domain.repository_for(Category).get(category_id))


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest) -> ReviewIdResponse:
    """Submit a review of a restaurant visit."""
    visit_date = body.visit_date if isinstance(body.visit_date, str) else body.visit_date.isoformat()
    command = SubmitReview(
        user_id=body.user_id,
        restaurant_id=body.restaurant_id,
        text=body.text,
        visit_date=visit_date,
        standard=json.dumps(body.ratings.standard),
        custom=json.dumps(body.ratings.custom),
        photos=json.dumps(body.photos),
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id, overall_rating=get_review(review_id).overall_rating)


@review_router.get("", response_model=list[ReviewResponse])
async def list_reviews(restaurant_id: str | None = None, user_id: str | None = None) -> list[ReviewResponse]:
    """List reviews for a restaurant, by a user, or the most recent."""
    if restaurant_id:
        reviews = reviews_for_restaurant(restaurant_id)
    elif user_id:
        reviews = reviews_by_user(user_id)
    else:
        reviews = recent_reviews()
    return [_review(d) for d in with_details(reviews)]


@review_router.get("/all", response_model=list[ReviewResponse])
async def all_reviews(timeframe: str | None = None) -> list[ReviewResponse]:
    """List every review, optionally limited to a period."""
    return [_review(d) for d in with_details(reviews_in_timeframe(timeframe))]


@review_router.get("/{review_id}", response_model=ReviewResponse)
async def get_single_review(review_id: str) -> ReviewResponse:
    """Get a single review."""
    return _review(with_details([get_review(review_id)])[0])


@review_router.post("/{review_id}/comments", status_code=201, response_model=CommentIdResponse)
async def add_comment(review_id: str, body: AddCommentRequest) -> CommentIdResponse:
    """Comment on a review."""
    command = AddComment(review_id=review_id, user_id=body.user_id, text=body.text)
    comment_id = current_domain.process(command, asynchronous=False)
    return CommentIdResponse(comment_id=comment_id)


@review_router.get("/{review_id}/comments", response_model=list[CommentResponse])
async def list_comments(review_id: str) -> list[CommentResponse]:
    """List the comments on a review."""
    return [_comment(d) for d in with_authors(comments_for_review(review_id))]


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------
@comment_router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment_id: str) -> Response:
    """Delete a comment."""
    current_domain.process(DeleteComment(comment_id=comment_id), asynchronous=False)
    return Response(status_code=204)
