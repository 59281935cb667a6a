from datetime import datetime
from typing import Sequence

from rentals.domain.entities.booking import Booking


class BookingRepo:
    async def get_by_id(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    async def get_by_payment_reference(self, provider_payment_id: str) -> Booking | None:
        raise NotImplementedError

    async def list_active_for_listing(self, listing_id: str) -> Sequence[Booking]:
        """Bookings of the listing whose status is PENDING or CONFIRMED."""
        raise NotImplementedError

    async def list_for_guest(self, guest_user_id: str) -> Sequence[Booking]:
        raise NotImplementedError

    async def lock_listing(self, listing_id: str) -> None:
        """Serializes check-then-insert on one listing until the transaction ends."""
        raise NotImplementedError

    async def insert(self, booking: Booking) -> None:
        """
        Persists a new booking and claims its nights.

        Raises:
            ConcurrencyConflictError: an active booking already holds one of the nights.
            DuplicatePaymentReferenceError: provider_payment_id is already used.
        """
        raise NotImplementedError

    async def mark_confirmed(self, booking_id: str, updated_at: datetime) -> bool:
        """PENDING -> CONFIRMED. Returns False if the row was not PENDING."""
        raise NotImplementedError

    async def mark_cancelled(self, booking_id: str, updated_at: datetime) -> bool:
        """Active -> CANCELLED and releases the nights. Returns False if not active."""
        raise NotImplementedError
