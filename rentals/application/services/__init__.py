"""Services of the reservation core."""

from rentals.application.services.availability import AvailabilityChecker
from rentals.application.services.booking_ledger import BookingLedger
from rentals.application.services.payment_reconciler import PaymentReconciler
from rentals.application.services.reservation_service import ReservationService

__all__ = [
    "AvailabilityChecker",
    "BookingLedger",
    "PaymentReconciler",
    "ReservationService",
]
