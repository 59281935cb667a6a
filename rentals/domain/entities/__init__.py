"""Entities of the reservation domain."""

from rentals.domain.entities.booking import Booking, BookingStatus
from rentals.domain.entities.listing import Listing
from rentals.domain.entities.payment_review import PaymentReview

__all__ = [
    "Booking",
    "BookingStatus",
    "Listing",
    "PaymentReview",
]
