"""
Application layer of the reservation core.

Structure:
- services/: availability, booking ledger, payment reconciliation, orchestration
- use_cases/: request-boundary flows (payment webhook)
- dtos/: checkout and payment-event data
- interfaces/: ports implemented by the infrastructure layer
"""

from rentals.application.dtos import (
    PaymentEvent,
    PaymentIntentHandle,
    PaymentMetadata,
    WebhookOutcome,
)
from rentals.application.services import (
    AvailabilityChecker,
    BookingLedger,
    PaymentReconciler,
    ReservationService,
)
from rentals.application.use_cases.handle_payment_webhook import HandlePaymentWebhookUseCase

__all__ = [
    # Services
    "AvailabilityChecker",
    "BookingLedger",
    "PaymentReconciler",
    "ReservationService",
    # Use cases
    "HandlePaymentWebhookUseCase",
    # DTOs
    "PaymentEvent",
    "PaymentIntentHandle",
    "PaymentMetadata",
    "WebhookOutcome",
]
