"""
Domain layer of the reservation core.

Pure business rules without framework dependencies.

Layout:
- entities/: Booking, Listing, PaymentReview
- value_objects/: StayRange
- pricing.py: price computation
- errors.py: domain exceptions
- constants.py: status and event names
"""

from rentals.domain.constants import (
    ACTIVE_BOOKING_STATUSES,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_PENDING,
    PAYMENT_EVENT_FAILED,
    PAYMENT_EVENT_SUCCEEDED,
)
from rentals.domain.entities import Booking, BookingStatus, Listing, PaymentReview
from rentals.domain.errors import (
    BookingNotFoundError,
    ConcurrencyConflictError,
    DateRangeUnavailableError,
    DomainError,
    DuplicatePaymentReferenceError,
    InvalidDateRangeError,
    InvalidInputError,
    InvalidRangeError,
    InvalidTransitionError,
    InvalidWebhookPayloadError,
    ListingNotFoundError,
    NotAuthenticatedError,
    NotAuthorizedError,
    PaymentProviderError,
    PaymentRequiresReviewError,
)
from rentals.domain.pricing import PriceQuote, compute_total
from rentals.domain.value_objects import StayRange

__all__ = [
    # Constants
    "ACTIVE_BOOKING_STATUSES",
    "BOOKING_STATUS_CANCELLED",
    "BOOKING_STATUS_CONFIRMED",
    "BOOKING_STATUS_PENDING",
    "PAYMENT_EVENT_FAILED",
    "PAYMENT_EVENT_SUCCEEDED",
    # Entities
    "Booking",
    "BookingStatus",
    "Listing",
    "PaymentReview",
    # Value objects
    "StayRange",
    # Pricing
    "PriceQuote",
    "compute_total",
    # Errors
    "DomainError",
    "InvalidInputError",
    "InvalidDateRangeError",
    "InvalidRangeError",
    "ListingNotFoundError",
    "DateRangeUnavailableError",
    "ConcurrencyConflictError",
    "InvalidTransitionError",
    "BookingNotFoundError",
    "NotAuthenticatedError",
    "NotAuthorizedError",
    "InvalidWebhookPayloadError",
    "DuplicatePaymentReferenceError",
    "PaymentRequiresReviewError",
    "PaymentProviderError",
]
