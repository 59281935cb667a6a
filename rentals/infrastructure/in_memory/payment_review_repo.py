from rentals.application.interfaces.payment_review_repo import PaymentReviewRepo
from rentals.domain.entities.payment_review import PaymentReview


class InMemoryPaymentReviewRepo(PaymentReviewRepo):
    def __init__(self) -> None:
        self.reviews: dict[str, PaymentReview] = {}

    async def get_by_payment_reference(self, provider_payment_id: str) -> PaymentReview | None:
        return self.reviews.get(provider_payment_id)

    async def save(self, review: PaymentReview) -> PaymentReview:
        existing = self.reviews.get(review.provider_payment_id)
        if existing:
            return existing
        review.id = len(self.reviews) + 1
        self.reviews[review.provider_payment_id] = review
        return review
