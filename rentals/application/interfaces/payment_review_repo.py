from rentals.domain.entities.payment_review import PaymentReview


class PaymentReviewRepo:
    async def get_by_payment_reference(self, provider_payment_id: str) -> PaymentReview | None:
        raise NotImplementedError

    async def save(self, review: PaymentReview) -> PaymentReview:
        """
        Stores the review once per provider_payment_id and returns the stored one.

        Raises DuplicatePaymentReferenceError when a concurrent writer stored a
        review for the same payment first.
        """
        raise NotImplementedError
