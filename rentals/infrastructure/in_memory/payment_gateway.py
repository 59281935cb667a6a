import json
from uuid import uuid4

from rentals.application.interfaces.payment_gateway import PaymentGateway, PaymentIntentResult


class StubPaymentGateway(PaymentGateway):
    """Records intents locally instead of calling the provider."""

    def __init__(self) -> None:
        self.intents: dict[str, dict] = {}

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        description: str | None = None,
    ) -> PaymentIntentResult:
        intent_id = f"pi_{uuid4().hex[:14]}"
        self.intents[intent_id] = {
            "id": intent_id,
            "amount": amount,
            "currency": currency,
            "metadata": dict(metadata),
            "description": description,
            "status": "requires_payment_method",
        }
        return PaymentIntentResult(
            provider_payment_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:10]}",
            status="requires_payment_method",
        )

    async def parse_webhook_event(
        self,
        payload: bytes,
        signature_header: str | None,
        webhook_secret: str | None,
    ) -> dict:
        if not payload:
            raise ValueError("Empty webhook payload")
        try:
            event = json.loads(payload.decode() or "{}")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValueError("Invalid webhook payload") from exc
        if not isinstance(event, dict):
            raise ValueError("Invalid webhook payload")
        return event
