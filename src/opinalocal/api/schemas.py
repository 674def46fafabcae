"""Pydantic request/response schemas for the OpinaLocal API.

These are separate from Protean commands (anti-corruption pattern). Request
models only shape the payload; domain rules are enforced by the aggregates.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    external_id: str
    email: str
    name: str
    photo_url: str | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = None
    photo_url: str | None = None


class UpdatePreferencesRequest(BaseModel):
    notify_on_comment: bool | None = None
    notify_on_new_review: bool | None = None
    notify_on_category_approval: bool | None = None
    notify_on_newsletter: bool | None = None


class PushSubscriptionRequest(BaseModel):
    subscription: dict[str, Any]


class AddressSchema(BaseModel):
    street: str
    city: str
    state: str
    postal_code: str
    full_address: str


class LocationSchema(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class RegisterRestaurantRequest(BaseModel):
    name: str
    address: AddressSchema
    location: LocationSchema | None = None
    photo_url: str | None = None
    created_by: str
    # Ignored: restaurants always start unvalidated
    is_validated: bool | None = None


class UpdateRestaurantRequest(BaseModel):
    requester_id: str
    name: str | None = None
    address: AddressSchema | None = None
    photo_url: str | None = None


class CreateCategoryRequest(BaseModel):
    name: str
    created_by: str


class SetCategoryStatusRequest(BaseModel):
    status: str


class RatingsSchema(BaseModel):
    standard: dict[str, Any] = Field(default_factory=dict)
    custom: dict[str, Any] = Field(default_factory=dict)


class SubmitReviewRequest(BaseModel):
    user_id: str
    restaurant_id: str
    text: str
    visit_date: date | datetime | str
    ratings: RatingsSchema = Field(default_factory=RatingsSchema)
    photos: list[str] = Field(default_factory=list)
    # Accepted for compatibility and discarded; the server computes it
    overall_rating: float | None = None


class AddCommentRequest(BaseModel):
    user_id: str
    text: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class UserIdResponse(BaseModel):
    user_id: str


class RestaurantIdResponse(BaseModel):
    restaurant_id: str


class CategoryIdResponse(BaseModel):
    category_id: str
    status: str


class ReviewIdResponse(BaseModel):
    review_id: str
    overall_rating: float


class CommentIdResponse(BaseModel):
    comment_id: str


class SubscriptionIdResponse(BaseModel):
    subscription_id: str


class OwnershipResponse(BaseModel):
    ownership_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class UserResponse(BaseModel):
    id: str
    external_id: str
    email: str
    name: str
    photo_url: str | None = None
    role: str
    notify_on_comment: bool
    notify_on_new_review: bool
    notify_on_category_approval: bool
    notify_on_newsletter: bool


class RatingSummaryResponse(BaseModel):
    average_rating: float
    review_count: int


class RestaurantResponse(BaseModel):
    id: str
    name: str
    address: AddressSchema
    location: LocationSchema | None = None
    photo_url: str | None = None
    is_validated: bool
    created_by: str
    average_rating: float | None = None
    review_count: int | None = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    created_by: str
    status: str
    created_at: datetime | None = None


class CategoryAverageResponse(BaseModel):
    category_name: str
    average: float


class AuthorSummary(BaseModel):
    id: str
    name: str
    photo_url: str | None = None


class RestaurantSummary(BaseModel):
    id: str
    name: str
    full_address: str


class ReviewResponse(BaseModel):
    id: str
    user_id: str
    restaurant_id: str
    author: AuthorSummary | None = None
    restaurant: RestaurantSummary | None = None
    text: str
    photos: list[str]
    visit_date: date
    ratings: RatingsSchema
    overall_rating: float
    created_at: datetime | None = None


class CommentResponse(BaseModel):
    id: str
    review_id: str
    user_id: str
    author: AuthorSummary | None = None
    text: str
    created_at: datetime | None = None
