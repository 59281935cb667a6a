import pytest

from rentals.application.dtos.checkout import PaymentEvent
from rentals.application.dtos.payment_metadata import PaymentMetadata
from rentals.domain.constants import PAYMENT_EVENT_FAILED, PAYMENT_EVENT_SUCCEEDED
from rentals.domain.errors import InvalidWebhookPayloadError
from tests.factories import d, payment_metadata, stripe_event


class TestPaymentMetadata:
    def test_parses_string_values(self):
        metadata = PaymentMetadata.parse(payment_metadata())

        assert metadata.check_in == d("2024-08-01")
        assert metadata.guest_count == 2
        assert metadata.total_price == 450

    def test_unknown_keys_are_ignored(self):
        metadata = PaymentMetadata.parse(payment_metadata(source="web"))

        assert metadata.listing_id == "lst-1"

    def test_error_names_the_bad_fields(self):
        with pytest.raises(InvalidWebhookPayloadError) as exc_info:
            PaymentMetadata.parse(payment_metadata(guest_count="zero"), provider_payment_id="pi_9")

        assert "guest_count" in exc_info.value.message
        assert exc_info.value.provider_payment_id == "pi_9"

    def test_provider_metadata_omits_empty_values(self):
        metadata = PaymentMetadata.parse(payment_metadata())

        assert metadata.to_provider_metadata() == payment_metadata()

    @pytest.mark.parametrize(
        "raw",
        [
            {
                "listing_id": "lst-1",
                "guest_user_id": "guest-1",
                "check_in": "2024-08-01",
                "check_out": "2024-08-04",
                "guest_count": "2",
                "total_price": "450",
            },
            {
                "listingId": "lst-1",
                "guestUserId": "guest-1",
                "checkIn": "2024-08-01",
                "checkOut": "2024-08-04",
                "guestCount": "2",
                "totalPrice": "450",
            },
            {
                "listingId": "lst-1",
                "userId": "guest-1",
                "checkIn": "2024-08-01T00:00:00.000Z",
                "checkOut": "2024-08-04T00:00:00.000Z",
                "guests": "2",
                "nights": "3",
                "subtotal": "450",
                "totalPrice": "450",
            },
        ],
        ids=["snake_case", "camel_case", "legacy_intent"],
    )
    def test_accepts_each_key_style(self, raw):
        metadata = PaymentMetadata.parse(raw)

        assert metadata.listing_id == "lst-1"
        assert metadata.guest_user_id == "guest-1"
        assert metadata.check_in == d("2024-08-01")
        assert metadata.check_out == d("2024-08-04")
        assert metadata.guest_count == 2
        assert metadata.total_price == 450

    def test_provider_metadata_is_written_in_snake_case(self):
        metadata = PaymentMetadata.parse(
            {
                "listingId": "lst-1",
                "userId": "guest-1",
                "checkIn": "2024-08-01",
                "checkOut": "2024-08-04",
                "guests": "2",
                "totalPrice": "450",
            }
        )

        assert metadata.to_provider_metadata() == {
            "listing_id": "lst-1",
            "guest_user_id": "guest-1",
            "check_in": "2024-08-01",
            "check_out": "2024-08-04",
            "guest_count": "2",
            "total_price": "450",
        }


class TestPaymentEvent:
    def test_stripe_envelope(self):
        event = PaymentEvent.from_provider_event(stripe_event("pi_1"))

        assert event.type == PAYMENT_EVENT_SUCCEEDED
        assert event.provider_payment_id == "pi_1"
        assert event.metadata == payment_metadata()
        assert event.event_id == "evt_1"

    def test_stripe_failure_carries_reason(self):
        raw = stripe_event("pi_1", event_type="payment_intent.payment_failed")
        raw["data"]["object"]["last_payment_error"] = {"code": "card_declined"}

        event = PaymentEvent.from_provider_event(raw)

        assert event.type == PAYMENT_EVENT_FAILED
        assert event.reason == "card_declined"

    def test_flat_shape(self):
        event = PaymentEvent.from_provider_event(
            {"type": "payment.succeeded", "providerPaymentId": "pi_2", "metadata": {"a": "b"}}
        )

        assert event.type == PAYMENT_EVENT_SUCCEEDED
        assert event.provider_payment_id == "pi_2"
        assert event.metadata == {"a": "b"}

    def test_unknown_type_is_kept(self):
        event = PaymentEvent.from_provider_event({"type": "charge.refunded", "data": {}})

        assert event.type == "charge.refunded"
        assert event.provider_payment_id == ""

    def test_missing_type_is_rejected(self):
        with pytest.raises(InvalidWebhookPayloadError):
            PaymentEvent.from_provider_event({"data": {"object": {"id": "pi_1"}}})
