"""Pydantic request/response schemas for the Reviews API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.schemas import ApiModel


class SubmitReviewRequest(ApiModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "productId": "3f0c1a9e-5a43-4c1e-9d55-0b6f0e1f2a10",
                    "rating": 5,
                    "comment": "Great fit, fast delivery.",
                }
            ]
        }
    }

    product_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)


class ReviewResponse(ApiModel):
    id: str
    user_id: str
    product_id: str
    rating: int
    comment: str
    status: str
    created_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewResponse:
        return cls(
            id=str(review.id),
            user_id=str(review.user_id),
            product_id=str(review.product_id),
            rating=review.rating,
            comment=review.comment,
            status=review.status,
            created_at=review.created_at,
        )


class ReviewUser(ApiModel):
    id: str
    name: str
    email: str


class ReviewProduct(ApiModel):
    id: str
    name: str


class AdminReviewResponse(ReviewResponse):
    user: ReviewUser | None = None
    product: ReviewProduct | None = None

    @classmethod
    def from_view(cls, view) -> AdminReviewResponse:
        data = ReviewResponse.from_review(view.review).model_dump()
        user = product = None
        if view.user is not None:
            user = ReviewUser(id=str(view.user.id), name=view.user.name, email=view.user.email)
        if view.product is not None:
            product = ReviewProduct(id=str(view.product.id), name=view.product.name)
        return cls(**data, user=user, product=product)


class PublicReviewResponse(ReviewResponse):
    user_name: str | None = None

    @classmethod
    def from_view(cls, view) -> PublicReviewResponse:
        data = ReviewResponse.from_review(view.review).model_dump()
        return cls(**data, user_name=view.user.name if view.user is not None else None)
