"""SubmitReview: a buyer posts a review, which waits for moderation."""

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from catalogue.product.product import Product
from reviews.review.review import Review
from shared.domain import storefront
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Review")
class SubmitReview:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        current_domain.repository_for(Product).get(command.product_id)

        review = Review.submit(
            user_id=command.user_id,
            product_id=command.product_id,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(Review).add(review)

        logger.info(
            "review_submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            rating=command.rating,
        )
        return str(review.id)
