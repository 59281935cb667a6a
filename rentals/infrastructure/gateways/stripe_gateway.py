import asyncio
import json
import logging
from typing import Any

import stripe

from rentals.application.interfaces.payment_gateway import PaymentGateway, PaymentIntentResult
from rentals.domain.errors import PaymentProviderError
from rentals.infrastructure.circuit_breaker import CircuitBreakerError, stripe_breaker

logger = logging.getLogger(__name__)


class StripePaymentGateway(PaymentGateway):
    """
    Stripe-backed payment gateway.

    The Stripe SDK is synchronous, so calls run in a worker thread behind
    the circuit breaker and are bounded by ``timeout_seconds``.
    """

    def __init__(self, api_key: str | None, timeout_seconds: float = 10.0) -> None:
        if api_key:
            stripe.api_key = api_key
        stripe.max_network_retries = 2
        self._timeout_seconds = timeout_seconds

    async def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        description: str | None = None,
    ) -> PaymentIntentResult:
        """
        Raises:
            PaymentProviderError: timeout, open circuit or any Stripe API error.
        """
        try:
            intent = await asyncio.wait_for(
                asyncio.to_thread(
                    stripe_breaker.call,
                    stripe.PaymentIntent.create,
                    amount=amount,
                    currency=currency.lower(),
                    metadata=metadata,
                    description=description,
                    automatic_payment_methods={"enabled": True},
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            logger.error("Stripe call timed out", extra={"timeout": self._timeout_seconds})
            raise PaymentProviderError("Payment provider timed out") from exc
        except CircuitBreakerError as exc:
            logger.error(
                "Stripe circuit breaker is open - service unavailable",
                extra={"circuit_state": str(exc)},
            )
            raise PaymentProviderError("Payment provider unavailable") from exc
        except stripe.StripeError as exc:
            logger.error(
                "Stripe API error",
                exc_info=exc,
                extra={"listing_id": metadata.get("listing_id")},
            )
            raise PaymentProviderError(exc.user_message or "Payment provider error") from exc

        return PaymentIntentResult(
            provider_payment_id=intent.id,
            client_secret=intent.client_secret,
            status=intent.status,
        )

    async def parse_webhook_event(
        self,
        payload: bytes,
        signature_header: str | None,
        webhook_secret: str | None,
    ) -> dict[str, Any]:
        """
        Verifies the Stripe-Signature header when a secret is configured;
        without one the payload is trusted as-is (local development only).

        Raises:
            ValueError: bad signature or unparseable payload.
        """
        if webhook_secret:
            if not signature_header:
                raise ValueError("Missing Stripe-Signature header")
            try:
                event = stripe.Webhook.construct_event(
                    payload=payload.decode(),
                    sig_header=signature_header,
                    secret=webhook_secret,
                )
            except stripe.SignatureVerificationError as exc:
                raise ValueError("Invalid Stripe signature") from exc
            except Exception as exc:  # noqa: BLE001
                raise ValueError("Invalid Stripe webhook payload") from exc
        else:
            try:
                event = stripe.Event.construct_from(
                    json.loads(payload.decode() or "{}"), stripe.api_key
                )
            except Exception as exc:  # noqa: BLE001
                raise ValueError("Invalid webhook payload") from exc

        return event.to_dict() if hasattr(event, "to_dict") else dict(event)
