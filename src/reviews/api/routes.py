"""FastAPI endpoints for the Reviews domain."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.api.deps import current_user, require_admin
from identity.user.user import User
from reviews.api.schemas import AdminReviewResponse, PublicReviewResponse, ReviewResponse, SubmitReviewRequest
from reviews.review.moderation import (
    ApproveReview,
    DeleteReview,
    get_review,
    list_approved_reviews,
    list_reviews_for_admin,
)
from reviews.review.submission import SubmitReview
from shared.schemas import MessageResponse

review_router = APIRouter(prefix="/api", tags=["reviews"])


@review_router.post("/reviews", status_code=201, response_model=MessageResponse)
async def submit_review(body: SubmitReviewRequest, user: User = Depends(current_user)) -> MessageResponse:
    command = SubmitReview(user_id=str(user.id), product_id=body.product_id, rating=body.rating, comment=body.comment)
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Review submitted and awaiting approval")


@review_router.get("/products/{product_id}/reviews", response_model=list[PublicReviewResponse])
async def get_product_reviews(product_id: str) -> list[PublicReviewResponse]:
    return [PublicReviewResponse.from_view(view) for view in list_approved_reviews(product_id)]


@review_router.get("/admin/reviews", response_model=list[AdminReviewResponse], dependencies=[Depends(require_admin)])
async def get_admin_reviews() -> list[AdminReviewResponse]:
    return [AdminReviewResponse.from_view(view) for view in list_reviews_for_admin()]


@review_router.put(
    "/admin/reviews/{review_id}/approve", response_model=ReviewResponse, dependencies=[Depends(require_admin)]
)
async def approve_review(review_id: str) -> ReviewResponse:
    current_domain.process(ApproveReview(review_id=review_id), asynchronous=False)
    return ReviewResponse.from_review(get_review(review_id))


@review_router.delete(
    "/admin/reviews/{review_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)]
)
async def delete_review(review_id: str) -> MessageResponse:
    current_domain.process(DeleteReview(review_id=review_id), asynchronous=False)
    return MessageResponse(message="Review deleted successfully")
