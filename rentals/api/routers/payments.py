from fastapi import APIRouter, Depends, Request, status

from rentals.api.dependencies import get_current_actor, get_services
from rentals.api.schemas.payments import (
    CreatePaymentIntentRequest,
    CreatePaymentIntentResponse,
    WebhookResponse,
)
from rentals.application.interfaces.identity import Actor

router = APIRouter()


@router.post(
    "/payments/create-intent",
    response_model=CreatePaymentIntentResponse,
    status_code=status.HTTP_200_OK,
)
async def create_payment_intent(
    payload: CreatePaymentIntentRequest,
    actor: Actor = Depends(get_current_actor),
    services=Depends(get_services),
) -> CreatePaymentIntentResponse:
    handle = await services["reservations"].begin_paid_checkout(
        listing_id=payload.listing_id,
        guest_user_id=actor.user_id,
        check_in=payload.check_in,
        check_out=payload.check_out,
        guest_count=payload.guest_count,
    )
    return CreatePaymentIntentResponse(
        client_secret=handle.client_secret,
        provider_payment_id=handle.provider_payment_id,
        nights=handle.nights,
        subtotal=handle.subtotal,
        fee=handle.fee,
        total_price=handle.total_price,
        currency=handle.currency,
    )


@router.post("/payments/webhook", response_model=WebhookResponse, status_code=status.HTTP_200_OK)
async def payment_webhook(
    request: Request,
    services=Depends(get_services),
) -> WebhookResponse:
    # Authenticated by the provider signature, not by a user identity.
    raw_body = await request.body()
    signature = request.headers.get("Stripe-Signature")
    outcome = await services["handle_webhook"].execute(raw_body=raw_body, signature=signature)
    return WebhookResponse(
        event_type=outcome.event_type,
        booking_id=outcome.booking.id if outcome.booking else None,
        review_required=outcome.review_required,
        ignored=outcome.ignored,
    )
