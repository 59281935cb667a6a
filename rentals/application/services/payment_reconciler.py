import logging
from typing import Any

from rentals.application.dtos.checkout import PaymentEvent, WebhookOutcome
from rentals.application.dtos.payment_metadata import PaymentMetadata
from rentals.application.interfaces.booking_repo import BookingRepo
from rentals.application.interfaces.clock import Clock
from rentals.application.interfaces.id_generator import booking_id_for_payment
from rentals.application.interfaces.payment_review_repo import PaymentReviewRepo
from rentals.application.interfaces.transaction_manager import TransactionManager
from rentals.application.services.booking_ledger import BookingLedger
from rentals.domain.constants import PAYMENT_EVENT_FAILED, PAYMENT_EVENT_SUCCEEDED
from rentals.domain.entities.booking import Booking
from rentals.domain.entities.payment_review import PaymentReview
from rentals.domain.errors import (
    DateRangeUnavailableError,
    DuplicatePaymentReferenceError,
    InvalidWebhookPayloadError,
    PaymentRequiresReviewError,
)


class PaymentReconciler:
    """
    Turns provider payment events into bookings, exactly once per payment.

    Deliveries are at-least-once and may run concurrently; the unique
    payment reference on the booking row is the serialization point. The
    reconciler never schedules retries: raising lets the webhook answer
    with an error so the provider retries on its own schedule.
    """

    def __init__(
        self,
        booking_ledger: BookingLedger,
        booking_repo: BookingRepo,
        review_repo: PaymentReviewRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._booking_ledger = booking_ledger
        self._booking_repo = booking_repo
        self._review_repo = review_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def handle_event(self, event: PaymentEvent) -> WebhookOutcome:
        if event.type == PAYMENT_EVENT_SUCCEEDED:
            try:
                booking = await self.handle_payment_succeeded(
                    event.provider_payment_id, event.metadata
                )
            except PaymentRequiresReviewError:
                return WebhookOutcome(
                    event_type=event.type,
                        provider_payment_id=event.provider_payment_id,
                    review_required=True,
                )
            return WebhookOutcome(
                event_type=event.type,
                provider_payment_id=event.provider_payment_id,
                booking=booking,
            )

        if event.type == PAYMENT_EVENT_FAILED:
            await self.handle_payment_failed(event.provider_payment_id, event.reason)
            return WebhookOutcome(
                event_type=event.type, provider_payment_id=event.provider_payment_id
            )

        self._logger.info(
            "Ignoring unhandled payment event type",
            extra={"event_type": event.type, "event_id": event.event_id},
        )
        return WebhookOutcome(
            event_type=event.type, provider_payment_id=event.provider_payment_id, ignored=True
        )

    async def handle_payment_succeeded(
        self, provider_payment_id: str, metadata: dict[str, Any] | None
    ) -> Booking:
        """
        Returns the booking for this payment, creating it on first delivery.

        Raises:
            InvalidWebhookPayloadError: no payment id or unusable metadata.
            PaymentRequiresReviewError: the nights are taken; a review was recorded.
        """
        if not provider_payment_id:
            raise InvalidWebhookPayloadError("Missing provider payment id")
        try:
            params = PaymentMetadata.parse(metadata, provider_payment_id=provider_payment_id)
        except InvalidWebhookPayloadError as exc:
            self._logger.warning(
                "Rejected payment event with invalid metadata",
                extra={"provider_payment_id": provider_payment_id, "error": exc.message},
            )
            raise

        existing = await self._booking_repo.get_by_payment_reference(provider_payment_id)
        if existing:
            self._logger.info(
                "Payment already reconciled",
                extra={"provider_payment_id": provider_payment_id, "booking_id": existing.id},
            )
            return existing

        try:
            return await self._booking_ledger.create_confirmed(
                listing_id=params.listing_id,
                guest_user_id=params.guest_user_id,
                check_in=params.check_in,
                check_out=params.check_out,
                guest_count=params.guest_count,
                total_price=params.total_price,
                provider_payment_id=provider_payment_id,
                booking_id=booking_id_for_payment(provider_payment_id),
            )
        except DuplicatePaymentReferenceError:
            # A concurrent delivery of the same event won the insert.
            winner = await self._booking_repo.get_by_payment_reference(provider_payment_id)
            if winner is None:
                raise
            return winner
        except DateRangeUnavailableError as exc:
            # The "conflict" may be our own booking from a concurrent delivery.
            winner = await self._booking_repo.get_by_payment_reference(provider_payment_id)
            if winner is not None:
                return winner
            await self._flag_for_review(provider_payment_id, params, exc.message)
            raise PaymentRequiresReviewError(provider_payment_id, exc.message) from exc

    async def handle_payment_failed(self, provider_payment_id: str, reason: str | None) -> None:
        self._logger.warning(
            "Payment failed",
            extra={"provider_payment_id": provider_payment_id, "reason": reason},
        )

    async def _flag_for_review(
        self, provider_payment_id: str, params: PaymentMetadata, reason: str
    ) -> PaymentReview:
        try:
            async with self._transaction_manager.start():
                review = await self._review_repo.save(
                    PaymentReview(
                        provider_payment_id=provider_payment_id,
                        listing_id=params.listing_id,
                        guest_user_id=params.guest_user_id,
                        check_in=params.check_in,
                        check_out=params.check_out,
                        guest_count=params.guest_count,
                        total_price=params.total_price,
                        reason=reason,
                        created_at=self._clock.now(),
                    )
                )
        except DuplicatePaymentReferenceError:
            # A concurrent delivery recorded the review first.
            review = await self._review_repo.get_by_payment_reference(provider_payment_id)
            if review is None:
                raise
            return review
        self._logger.warning(
            "Paid booking needs review: dates no longer available",
            extra={
                "provider_payment_id": provider_payment_id,
                "listing_id": params.listing_id,
                "check_in": params.check_in.isoformat(),
                "check_out": params.check_out.isoformat(),
                "total_price": params.total_price,
            },
        )
        return review
