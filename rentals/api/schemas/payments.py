from datetime import date

from pydantic import BaseModel, ConfigDict, constr


class CreatePaymentIntentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    listing_id: constr(strip_whitespace=True, min_length=1, max_length=64)
    check_in: date
    check_out: date
    guest_count: int


class CreatePaymentIntentResponse(BaseModel):
    client_secret: str
    provider_payment_id: str
    nights: int
    subtotal: int
    fee: int
    total_price: int
    currency: str


class WebhookResponse(BaseModel):
    received: bool = True
    event_type: str
    booking_id: str | None = None
    review_required: bool = False
    ignored: bool = False
