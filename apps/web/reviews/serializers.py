"""
Pydantic schemas for review API requests and responses.

Every review response is camelCase on the wire: dump with by_alias=True.
"""

from datetime import datetime

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SubmitReviewRequest(BaseModel):
    """Request body for POST /api/reviews/order/{order_id}."""

    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(default="", max_length=500)


class CamelResponse(BaseModel):
    """Base for response schemas serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(serialization_alias=to_camel)
    )


class ReviewSchema(CamelResponse):
    """A review as shown publicly."""

    id: int
    order_id: int
    restaurant_id: int
    customer_name: str
    rating: int
    comment: str
    is_verified_purchase: bool
    created_at: datetime


class PaginationSchema(CamelResponse):
    current_page: int
    total_pages: int
    total_reviews: int
    has_next: bool
    has_prev: bool


class ReviewListResponse(CamelResponse):
    """Response for GET /api/reviews/restaurant/{id}."""

    reviews: list[ReviewSchema]
    pagination: PaginationSchema
    average_rating: float
    total_rating_count: int


class CanReviewResponse(CamelResponse):
    """Response for GET /api/reviews/can-review/{order_id}."""

    can_review: bool
    reason: str
