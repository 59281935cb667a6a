import logging

from rentals.application.dtos.checkout import PaymentEvent, WebhookOutcome
from rentals.application.interfaces.payment_gateway import PaymentGateway
from rentals.application.services.payment_reconciler import PaymentReconciler
from rentals.domain.errors import InvalidWebhookPayloadError


class HandlePaymentWebhookUseCase:
    """Boundary for provider webhooks: verify the signature, then reconcile."""

    def __init__(
        self,
        payment_gateway: PaymentGateway,
        reconciler: PaymentReconciler,
        webhook_secret: str | None,
    ) -> None:
        self._payment_gateway = payment_gateway
        self._reconciler = reconciler
        self._webhook_secret = webhook_secret
        self._logger = logging.getLogger(__name__)

    async def execute(self, raw_body: bytes, signature: str | None) -> WebhookOutcome:
        if not raw_body:
            raise InvalidWebhookPayloadError("Empty webhook body")
        try:
            event_dict = await self._payment_gateway.parse_webhook_event(
                payload=raw_body,
                signature_header=signature,
                webhook_secret=self._webhook_secret,
            )
        except ValueError as exc:
            self._logger.warning("Rejected webhook", extra={"error": str(exc)})
            raise InvalidWebhookPayloadError(str(exc)) from exc

        event = PaymentEvent.from_provider_event(event_dict)
        outcome = await self._reconciler.handle_event(event)
        self._logger.info(
            "Payment webhook processed",
            extra={
                "event_id": event.event_id,
                "event_type": outcome.event_type,
                "provider_payment_id": outcome.provider_payment_id,
                "booking_id": outcome.booking.id if outcome.booking else None,
                "review_required": outcome.review_required,
                "ignored": outcome.ignored,
            },
        )
        return outcome
