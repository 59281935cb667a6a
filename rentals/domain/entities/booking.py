"""Booking entity - aggregate root of the reservation core."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from rentals.domain.errors import InvalidTransitionError
from rentals.domain.value_objects.stay_range import StayRange


class BookingStatus(str, Enum):
    """Lifecycle states of a booking. CANCELLED is absorbing."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


@dataclass
class Booking:
    """
    A guest's claim on a listing for a range of nights.

    ``total_price`` is fixed when the booking is created and never
    recomputed from the listing's current price.
    """

    # Identifiers
    id: str
    listing_id: str
    guest_user_id: str

    # Stay
    check_in: date
    check_out: date
    guest_count: int

    # Price (smallest currency unit)
    total_price: int

    status: BookingStatus = BookingStatus.PENDING

    # Idempotency key of the payment-first path
    provider_payment_id: str | None = None

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Computed properties ===

    @property
    def stay(self) -> StayRange:
        return StayRange(check_in=self.check_in, check_out=self.check_out)

    @property
    def nights(self) -> int:
        return self.stay.nights

    @property
    def is_active(self) -> bool:
        """Active bookings occupy nights on the listing's calendar."""
        return self.status in (BookingStatus.PENDING, BookingStatus.CONFIRMED)

    @property
    def is_cancelled(self) -> bool:
        return self.status == BookingStatus.CANCELLED

    def overlaps(self, check_in: date, check_out: date) -> bool:
        return self.check_in < check_out and check_in < self.check_out

    # === State machine ===

    def confirm(self, at: datetime) -> bool:
        """
        PENDING -> CONFIRMED.

        Returns False when the booking was already confirmed (no change).

        Raises:
            InvalidTransitionError: the booking is cancelled.
        """
        if self.status == BookingStatus.CANCELLED:
            raise InvalidTransitionError(self.id, self.status.value, "confirm")
        if self.status == BookingStatus.CONFIRMED:
            return False
        self.status = BookingStatus.CONFIRMED
        self.updated_at = at
        return True

    def cancel(self, at: datetime) -> bool:
        """
        PENDING or CONFIRMED -> CANCELLED.

        Returns False when the booking was already cancelled (no change).
        """
        if self.status == BookingStatus.CANCELLED:
            return False
        self.status = BookingStatus.CANCELLED
        self.updated_at = at
        return True
