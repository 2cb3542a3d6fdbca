"""
Review API views.

- POST /api/reviews/order/{order_id} (customer)
- GET /api/reviews/restaurant/{restaurant_id} (public, paginated)
- GET /api/reviews/can-review/{order_id} (customer)
"""

import math

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.web.core.decorators import role_required
from apps.web.core.exceptions import NotFound
from apps.web.core.http import json_response, parse_body, query_int
from apps.web.core.models import User
from apps.web.restaurant.models import Restaurant
from apps.web.reviews.models import Review
from apps.web.reviews.serializers import (
    CanReviewResponse,
    PaginationSchema,
    ReviewListResponse,
    ReviewSchema,
    SubmitReviewRequest,
)
from apps.web.reviews.services import can_review, submit_review

MAX_PAGE_SIZE = 50


def _serialize_review(review: Review) -> ReviewSchema:
    return ReviewSchema(
        id=review.pk,
        order_id=review.order_id,
        restaurant_id=review.restaurant_id,
        customer_name=review.user.name or "Customer",
        rating=review.rating,
        comment=review.comment,
        is_verified_purchase=review.is_verified_purchase,
        created_at=review.created_at,
    )


@csrf_exempt
@require_POST
@role_required(User.Role.CUSTOMER)
def submit_order_review(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    POST /api/reviews/order/{order_id}

    Body: {"rating": 1-5, "comment": "..."}
    """
    data = parse_body(request, SubmitReviewRequest)
    review = submit_review(
        order_id,
        request.user,  # type: ignore[arg-type]
        rating=data.rating,
        comment=data.comment,
    )
    return json_response(
        {
            "message": "Review submitted successfully",
            "review": _serialize_review(review).model_dump(mode="json", by_alias=True),
        },
        201,
    )


@require_GET
def restaurant_reviews(request: HttpRequest, restaurant_id: int) -> JsonResponse:
    """
    GET /api/reviews/restaurant/{restaurant_id}?page=1&limit=10

    Newest first. limit is capped at 50.
    """
    try:
        restaurant = Restaurant.objects.get(pk=restaurant_id)
    except Restaurant.DoesNotExist as exc:
        raise NotFound("Restaurant not found") from exc

    page = query_int(request, "page", 1)
    limit = min(query_int(request, "limit", 10), MAX_PAGE_SIZE)

    reviews = Review.objects.filter(restaurant=restaurant).select_related("user")
    total = reviews.count()
    total_pages = math.ceil(total / limit)
    offset = (page - 1) * limit

    response = ReviewListResponse(
        reviews=[_serialize_review(r) for r in reviews[offset : offset + limit]],
        pagination=PaginationSchema(
            current_page=page,
            total_pages=total_pages,
            total_reviews=total,
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
        average_rating=restaurant.average_rating,
        total_rating_count=restaurant.total_rating_count,
    )
    return json_response(response.model_dump(mode="json", by_alias=True))


@require_GET
@role_required(User.Role.CUSTOMER)
def can_review_order(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    GET /api/reviews/can-review/{order_id}
    """
    allowed, reason = can_review(order_id, request.user)  # type: ignore[arg-type]
    return json_response(
        CanReviewResponse(can_review=allowed, reason=reason).model_dump(
            mode="json", by_alias=True
        )
    )
