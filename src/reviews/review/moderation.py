"""Review moderation and listings.

Admins approve pending reviews for publication or delete them. Only approved
reviews are shown on product pages.
"""

from dataclasses import dataclass

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from identity.user.user import User
from reviews.review.review import Review
from shared.domain import storefront
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Review")
class ApproveReview:
    review_id = Identifier(required=True)


@storefront.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class ModerateReviewHandler:
    @handle(ApproveReview)
    def approve_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.approve()
        repo.add(review)

        logger.info("review_approved", review_id=str(command.review_id))

    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        repo._dao.delete(review)

        logger.info("review_deleted", review_id=str(command.review_id))


@dataclass
class ReviewView:
    review: Review
    user: User | None = None
    product: Product | None = None


def _users_for(reviews) -> dict[str, User]:
    user_ids = list({str(review.user_id) for review in reviews})
    if not user_ids:
        return {}
    users = current_domain.repository_for(User)._dao.query.filter(id__in=user_ids).all().items
    return {str(user.id): user for user in users}


def get_review(review_id: str) -> Review:
    return current_domain.repository_for(Review).get(review_id)


def list_reviews_for_admin() -> list[ReviewView]:
    reviews = current_domain.repository_for(Review).newest_first()
    users = _users_for(reviews)
    products = current_domain.repository_for(Product).fetch_many(review.product_id for review in reviews)
    return [
        ReviewView(review, users.get(str(review.user_id)), products.get(str(review.product_id)))
        for review in reviews
    ]


def list_approved_reviews(product_id: str) -> list[ReviewView]:
    reviews = current_domain.repository_for(Review).approved_for(product_id)
    users = _users_for(reviews)
    return [ReviewView(review, users.get(str(review.user_id))) for review in reviews]
