"""DTOs for the payment-first checkout."""

from dataclasses import dataclass, field
from typing import Any

from rentals.domain.constants import PROVIDER_EVENT_TYPES
from rentals.domain.entities.booking import Booking
from rentals.domain.errors import InvalidWebhookPayloadError


@dataclass
class PaymentIntentHandle:
    """What the guest's browser needs to complete a paid checkout."""

    client_secret: str
    provider_payment_id: str
    nights: int
    subtotal: int
    fee: int
    total_price: int
    currency: str


@dataclass
class PaymentEvent:
    """Provider-neutral payment event."""

    type: str
    provider_payment_id: str
    metadata: dict[str, Any] = field(default_factory=dict)
    reason: str | None = None
    event_id: str | None = None

    @classmethod
    def from_provider_event(cls, event: dict[str, Any]) -> "PaymentEvent":
        """
        Builds an event from a verified provider payload.

        Accepts the Stripe envelope (``{"id", "type", "data": {"object": ...}}``)
        as well as the flat ``{"type", "providerPaymentId", "metadata"}`` shape.
        Unknown event types are kept verbatim so the caller can ignore them.
        """
        event_type = event.get("type")
        if not event_type:
            raise InvalidWebhookPayloadError("Missing event type")

        data = event.get("data")
        data_obj = data.get("object", {}) if isinstance(data, dict) else {}
        if not isinstance(data_obj, dict):
            data_obj = {}

        provider_payment_id = (
            data_obj.get("id")
            or data_obj.get("payment_intent")
            or event.get("providerPaymentId")
            or event.get("provider_payment_id")
        )
        metadata = data_obj.get("metadata")
        if metadata is None:
            metadata = event.get("metadata")

        reason = None
        last_error = data_obj.get("last_payment_error")
        if isinstance(last_error, dict):
            reason = last_error.get("message") or last_error.get("code")
        reason = reason or event.get("reason")

        return cls(
            type=PROVIDER_EVENT_TYPES.get(event_type, event_type),
            provider_payment_id=provider_payment_id or "",
            metadata=dict(metadata) if isinstance(metadata, dict) else {},
            reason=reason,
            event_id=event.get("id"),
        )


@dataclass
class WebhookOutcome:
    event_type: str
    provider_payment_id: str
    booking: Booking | None = None
    review_required: bool = False
    ignored: bool = False
