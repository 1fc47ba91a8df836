"""Review aggregate: a buyer's rating and comment on a product, moderated before publication."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from shared.domain import storefront


class ReviewStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"


@storefront.aggregate
class Review:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)
    status = String(max_length=20, choices=ReviewStatus, default=ReviewStatus.PENDING.value)
    created_at = DateTime()

    @classmethod
    def submit(cls, user_id, product_id, rating, comment):
        errors = {}
        if rating is None or not 1 <= rating <= 5:
            errors["rating"] = ["Rating must be between 1 and 5"]
        if not comment or not comment.strip():
            errors["comment"] = ["Comment is required"]
        if errors:
            raise ValidationError(errors)

        return cls(
            user_id=user_id,
            product_id=product_id,
            rating=rating,
            comment=comment.strip(),
            status=ReviewStatus.PENDING.value,
            created_at=datetime.now(UTC),
        )

    @property
    def is_approved(self) -> bool:
        return self.status == ReviewStatus.APPROVED.value

    def approve(self):
        if self.is_approved:
            raise ValidationError({"status": ["Review is already approved"]})
        self.status = ReviewStatus.APPROVED.value


@storefront.repository(part_of=Review)
class ReviewRepository:
    def newest_first(self) -> list[Review]:
        return self._dao.query.order_by("-created_at").all().items

    def approved_for(self, product_id) -> list[Review]:
        return (
            self._dao.query.filter(product_id=str(product_id), status=ReviewStatus.APPROVED.value)
            .order_by("-created_at")
            .all()
            .items
        )
