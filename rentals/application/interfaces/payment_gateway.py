from dataclasses import dataclass
from typing import Any


@dataclass
class PaymentIntentResult:
    provider_payment_id: str
    client_secret: str
    status: str


class PaymentGateway:
    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        description: str | None = None,
    ) -> PaymentIntentResult:
        raise NotImplementedError

    async def parse_webhook_event(
        self,
        payload: bytes,
        signature_header: str | None,
        webhook_secret: str | None,
    ) -> dict[str, Any]:
        raise NotImplementedError
