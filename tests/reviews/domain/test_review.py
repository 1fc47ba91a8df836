import pytest
from protean.exceptions import ValidationError

from reviews.review.review import Review, ReviewStatus


class TestSubmit:
    def test_new_review_is_pending(self):
        review = Review.submit(user_id="user-1", product_id="prod-1", rating=5, comment="  Great fit  ")
        assert review.status == ReviewStatus.PENDING.value
        assert review.comment == "Great fit"
        assert not review.is_approved

    @pytest.mark.parametrize("rating", [0, 6, None])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError) as exc:
            Review.submit(user_id="user-1", product_id="prod-1", rating=rating, comment="ok")
        assert exc.value.messages["rating"] == ["Rating must be between 1 and 5"]

    def test_blank_comment(self):
        with pytest.raises(ValidationError) as exc:
            Review.submit(user_id="user-1", product_id="prod-1", rating=4, comment="   ")
        assert exc.value.messages["comment"] == ["Comment is required"]


class TestApprove:
    def test_approve(self):
        review = Review.submit(user_id="user-1", product_id="prod-1", rating=4, comment="Nice")
        review.approve()
        assert review.status == "approved"
        assert review.is_approved

    def test_approve_twice_rejected(self):
        review = Review.submit(user_id="user-1", product_id="prod-1", rating=4, comment="Nice")
        review.approve()
        with pytest.raises(ValidationError) as exc:
            review.approve()
        assert exc.value.messages == {"status": ["Review is already approved"]}
