"""Test data builders shared across test modules."""

import json
from datetime import date

from rentals.domain.entities.listing import Listing

HOST_ID = "host-1"
GUEST_ID = "guest-1"
OTHER_GUEST_ID = "guest-2"
LISTING_ID = "lst-1"


def make_listing(**overrides) -> Listing:
    values = {
        "id": LISTING_ID,
        "host_id": HOST_ID,
        "nightly_price": 100,
        "active": True,
        "title": "Bosphorus view flat",
    }
    values.update(overrides)
    return Listing(**values)


def d(value: str) -> date:
    return date.fromisoformat(value)


def auth(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


def payment_metadata(**overrides) -> dict[str, str]:
    """Metadata as the provider hands it back: every value a string."""
    values = {
        "listing_id": LISTING_ID,
        "guest_user_id": GUEST_ID,
        "check_in": "2024-08-01",
        "check_out": "2024-08-04",
        "guest_count": "2",
        "total_price": "450",
    }
    values.update(overrides)
    return values


def stripe_event(
    provider_payment_id: str,
    metadata: dict[str, str] | None = None,
    event_type: str = "payment_intent.succeeded",
    event_id: str = "evt_1",
) -> dict:
    return {
        "id": event_id,
        "type": event_type,
        "data": {
            "object": {
                "id": provider_payment_id,
                "object": "payment_intent",
                "status": "succeeded",
                "metadata": metadata if metadata is not None else payment_metadata(),
            }
        },
    }


def stripe_event_body(*args, **kwargs) -> bytes:
    return json.dumps(stripe_event(*args, **kwargs)).encode()
