from typing import Any, Mapping

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.application.interfaces.payment_review_repo import PaymentReviewRepo
from rentals.domain.entities.payment_review import PaymentReview
from rentals.domain.errors import DuplicatePaymentReferenceError
from rentals.infrastructure.db.tables import payment_reviews


def _row_to_review(row: Mapping[str, Any]) -> PaymentReview:
    return PaymentReview(
        id=row["id"],
        provider_payment_id=row["provider_payment_id"],
        listing_id=row["listing_id"],
        guest_user_id=row["guest_user_id"],
        check_in=row["check_in"],
        check_out=row["check_out"],
        guest_count=row["guest_count"],
        total_price=row["total_price"],
        reason=row["reason"],
        created_at=row["created_at"],
    )


class PaymentReviewRepoSQL(PaymentReviewRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_payment_reference(self, provider_payment_id: str) -> PaymentReview | None:
        stmt = (
            select(payment_reviews)
            .where(payment_reviews.c.provider_payment_id == provider_payment_id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _row_to_review(row) if row else None

    async def save(self, review: PaymentReview) -> PaymentReview:
        existing = await self.get_by_payment_reference(review.provider_payment_id)
        if existing:
            return existing
        try:
            result = await self._session.execute(
                insert(payment_reviews).values(
                    provider_payment_id=review.provider_payment_id,
                    listing_id=review.listing_id,
                    guest_user_id=review.guest_user_id,
                    check_in=review.check_in,
                    check_out=review.check_out,
                    guest_count=review.guest_count,
                    total_price=review.total_price,
                    reason=review.reason,
                    created_at=review.created_at,
                )
            )
        except IntegrityError as exc:
            raise DuplicatePaymentReferenceError(review.provider_payment_id) from exc
        review.id = result.inserted_primary_key[0]
        return review
