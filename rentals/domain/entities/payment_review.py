"""PaymentReview entity - a paid checkout that could not become a booking."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class PaymentReview:
    """
    Raised for the host or an operator when a payment succeeded for nights
    that were taken in the meantime. The guest was charged ``total_price``
    and needs a refund or another accommodation; no booking exists.
    """

    provider_payment_id: str
    listing_id: str
    guest_user_id: str
    check_in: date
    check_out: date
    guest_count: int
    total_price: int
    reason: str
    id: int | None = None
    created_at: datetime | None = None
