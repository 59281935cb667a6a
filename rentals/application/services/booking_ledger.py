import logging
from datetime import date
from typing import Sequence

from rentals.application.interfaces.booking_repo import BookingRepo
from rentals.application.interfaces.clock import Clock
from rentals.application.interfaces.id_generator import IdGenerator
from rentals.application.interfaces.transaction_manager import TransactionManager
from rentals.application.services.availability import AvailabilityChecker
from rentals.domain.entities.booking import Booking, BookingStatus
from rentals.domain.entities.listing import Listing
from rentals.domain.errors import (
    BookingNotFoundError,
    ConcurrencyConflictError,
    InvalidInputError,
    InvalidTransitionError,
)
from rentals.domain.pricing import compute_total
from rentals.domain.value_objects.stay_range import StayRange


def validate_booking_request(check_in: date, check_out: date, guest_count: int) -> StayRange:
    if not isinstance(check_in, date) or not isinstance(check_out, date):
        raise InvalidInputError("dates", "check_in and check_out must be calendar dates")
    if isinstance(guest_count, bool) or not isinstance(guest_count, int) or guest_count < 1:
        raise InvalidInputError("guest_count", f"must be a positive integer, got {guest_count!r}")
    return StayRange(check_in=check_in, check_out=check_out)


class BookingLedger:
    """
    Owns booking rows and their status transitions.

    Authorization is the caller's job: the ledger assumes the actor has
    already been allowed to act on the booking.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        availability: AvailabilityChecker,
        transaction_manager: TransactionManager,
        id_generator: IdGenerator,
        clock: Clock,
    ) -> None:
        self._booking_repo = booking_repo
        self._availability = availability
        self._transaction_manager = transaction_manager
        self._id_generator = id_generator
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def create(
        self,
        listing: Listing,
        guest_user_id: str,
        check_in: date,
        check_out: date,
        guest_count: int,
    ) -> Booking:
        """Direct path: a PENDING booking priced at the listing's current rate."""
        stay = validate_booking_request(check_in, check_out, guest_count)
        quote = compute_total(listing.nightly_price, stay.check_in, stay.check_out)
        now = self._clock.now()
        booking = Booking(
            id=self._id_generator.new_booking_id(),
            listing_id=listing.id,
            guest_user_id=guest_user_id,
            check_in=stay.check_in,
            check_out=stay.check_out,
            guest_count=guest_count,
            total_price=quote.total,
            status=BookingStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        return await self._insert_if_available(booking)

    async def create_confirmed(
        self,
        listing_id: str,
        guest_user_id: str,
        check_in: date,
        check_out: date,
        guest_count: int,
        total_price: int,
        provider_payment_id: str,
        booking_id: str | None = None,
    ) -> Booking:
        """
        Payment-first path: the payment already succeeded, so the booking
        starts CONFIRMED at the price the guest was charged.

        Raises:
            DuplicatePaymentReferenceError: this payment already has a booking.
            DateRangeUnavailableError: the nights were taken in the meantime.
        """
        stay = validate_booking_request(check_in, check_out, guest_count)
        if total_price < 0:
            raise InvalidInputError("total_price", f"must be >= 0, got {total_price}")
        now = self._clock.now()
        booking = Booking(
            id=booking_id or self._id_generator.new_booking_id(),
            listing_id=listing_id,
            guest_user_id=guest_user_id,
            check_in=stay.check_in,
            check_out=stay.check_out,
            guest_count=guest_count,
            total_price=total_price,
            status=BookingStatus.CONFIRMED,
            provider_payment_id=provider_payment_id,
            created_at=now,
            updated_at=now,
        )
        return await self._insert_if_available(booking)

    async def _insert_if_available(self, booking: Booking) -> Booking:
        try:
            async with self._transaction_manager.start():
                await self._booking_repo.lock_listing(booking.listing_id)
                await self._availability.assert_available(
                    booking.listing_id, booking.check_in, booking.check_out
                )
                await self._booking_repo.insert(booking)
        except ConcurrencyConflictError:
            self._logger.warning(
                "Booking lost the race for its dates",
                extra={
                    "booking_id": booking.id,
                    "listing_id": booking.listing_id,
                    "check_in": booking.check_in.isoformat(),
                    "check_out": booking.check_out.isoformat(),
                },
            )
            raise

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "listing_id": booking.listing_id,
                "status": booking.status.value,
                "total_price": booking.total_price,
                "provider_payment_id": booking.provider_payment_id,
            },
        )
        return booking

    async def get(self, booking_id: str) -> Booking:
        booking = await self._booking_repo.get_by_id(booking_id)
        if not booking:
            raise BookingNotFoundError(booking_id)
        return booking

    async def list_for_guest(self, guest_user_id: str) -> Sequence[Booking]:
        return await self._booking_repo.list_for_guest(guest_user_id)

    async def confirm(self, booking_id: str) -> Booking:
        """PENDING -> CONFIRMED; confirming a confirmed booking is a no-op."""
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
            if not booking:
                raise BookingNotFoundError(booking_id, operation="confirm")
            now = self._clock.now()
            if not booking.confirm(now):
                return booking
            if not await self._booking_repo.mark_confirmed(booking_id, now):
                # Someone else moved it first; report the state they left.
                current = await self._booking_repo.get_by_id(booking_id)
                if current is None or current.status == BookingStatus.CANCELLED:
                    raise InvalidTransitionError(
                        booking_id, BookingStatus.CANCELLED.value, "confirm"
                    )
                return current

        self._logger.info("Booking confirmed", extra={"booking_id": booking_id})
        return booking

    async def cancel(self, booking_id: str) -> Booking:
        """Active -> CANCELLED; cancelling a cancelled booking is a no-op."""
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
            if not booking:
                raise BookingNotFoundError(booking_id, operation="cancel")
            now = self._clock.now()
            if not booking.cancel(now):
                return booking
            if not await self._booking_repo.mark_cancelled(booking_id, now):
                current = await self._booking_repo.get_by_id(booking_id)
                return current or booking

        self._logger.info(
            "Booking cancelled",
            extra={"booking_id": booking_id, "listing_id": booking.listing_id},
        )
        return booking
