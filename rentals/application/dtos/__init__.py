"""DTOs of the application layer."""

from rentals.application.dtos.checkout import PaymentEvent, PaymentIntentHandle, WebhookOutcome
from rentals.application.dtos.payment_metadata import PaymentMetadata

__all__ = [
    "PaymentEvent",
    "PaymentIntentHandle",
    "PaymentMetadata",
    "WebhookOutcome",
]
