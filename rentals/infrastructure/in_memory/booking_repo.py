from copy import copy
from datetime import date, datetime
from typing import Sequence

from rentals.application.interfaces.booking_repo import BookingRepo
from rentals.domain.entities.booking import Booking, BookingStatus
from rentals.domain.errors import ConcurrencyConflictError, DuplicatePaymentReferenceError


class InMemoryBookingRepo(BookingRepo):
    """
    Dict-backed bookings with the same constraints as the SQL schema.

    ``_nights`` plays the role of the unique ``(listing_id, night)`` index.
    ``insert`` checks and writes without awaiting in between, so it is
    atomic with respect to other coroutines on the event loop.
    """

    def __init__(self) -> None:
        self.bookings: dict[str, Booking] = {}
        self._by_payment: dict[str, str] = {}
        self._nights: dict[tuple[str, date], str] = {}

    async def get_by_id(self, booking_id: str) -> Booking | None:
        booking = self.bookings.get(booking_id)
        return copy(booking) if booking else None

    async def get_by_payment_reference(self, provider_payment_id: str) -> Booking | None:
        booking_id = self._by_payment.get(provider_payment_id)
        return await self.get_by_id(booking_id) if booking_id else None

    async def list_active_for_listing(self, listing_id: str) -> Sequence[Booking]:
        return [
            copy(b) for b in self.bookings.values() if b.listing_id == listing_id and b.is_active
        ]

    async def list_for_guest(self, guest_user_id: str) -> Sequence[Booking]:
        return sorted(
            (copy(b) for b in self.bookings.values() if b.guest_user_id == guest_user_id),
            key=lambda b: (b.check_in, b.id),
        )

    async def lock_listing(self, listing_id: str) -> None:
        return None

    async def insert(self, booking: Booking) -> None:
        if booking.provider_payment_id and booking.provider_payment_id in self._by_payment:
            raise DuplicatePaymentReferenceError(booking.provider_payment_id)
        if booking.id in self.bookings:
            if booking.provider_payment_id:
                raise DuplicatePaymentReferenceError(booking.provider_payment_id)
            raise ValueError("Booking id already exists")

        nights = [(booking.listing_id, night) for night in booking.stay.each_night()]
        if booking.is_active and any(key in self._nights for key in nights):
            raise ConcurrencyConflictError(booking.listing_id, booking.check_in, booking.check_out)

        self.bookings[booking.id] = copy(booking)
        if booking.provider_payment_id:
            self._by_payment[booking.provider_payment_id] = booking.id
        if booking.is_active:
            for key in nights:
                self._nights[key] = booking.id

    async def mark_confirmed(self, booking_id: str, updated_at: datetime) -> bool:
        booking = self.bookings.get(booking_id)
        if booking is None or booking.status != BookingStatus.PENDING:
            return False
        booking.status = BookingStatus.CONFIRMED
        booking.updated_at = updated_at
        return True

    async def mark_cancelled(self, booking_id: str, updated_at: datetime) -> bool:
        booking = self.bookings.get(booking_id)
        if booking is None or not booking.is_active:
            return False
        booking.status = BookingStatus.CANCELLED
        booking.updated_at = updated_at
        for night in booking.stay.each_night():
            self._nights.pop((booking.listing_id, night), None)
        return True
