import json

from fastapi.testclient import TestClient

from tests.factories import GUEST_ID, HOST_ID, LISTING_ID, OTHER_GUEST_ID, auth, stripe_event_body


def create_intent(client: TestClient, check_in="2024-08-01", check_out="2024-08-04", user=GUEST_ID):
    return client.post(
        "/api/v1/payments/create-intent",
        json={
            "listing_id": LISTING_ID,
            "check_in": check_in,
            "check_out": check_out,
            "guest_count": 2,
        },
        headers=auth(user),
    )


def deliver(client: TestClient, body: bytes):
    return client.post(
        "/api/v1/payments/webhook",
        content=body,
        headers={"Content-Type": "application/json"},
    )


class TestCreateIntent:
    def test_returns_client_secret_and_breakdown(self, client: TestClient, app_bundle):
        response = create_intent(client)

        assert response.status_code == 200, response.json()
        body = response.json()
        assert body["client_secret"]
        assert (body["nights"], body["subtotal"], body["fee"], body["total_price"]) == (
            3,
            300,
            36,
            336,
        )
        intent = app_bundle["payment_gateway"].intents[body["provider_payment_id"]]
        assert intent["metadata"]["guest_user_id"] == GUEST_ID

    def test_requires_identity(self, client: TestClient):
        response = client.post(
            "/api/v1/payments/create-intent",
            json={
                "listing_id": LISTING_ID,
                "check_in": "2024-08-01",
                "check_out": "2024-08-04",
                "guest_count": 2,
            },
        )

        assert response.status_code == 401

    def test_host_cannot_pay_for_own_listing(self, client: TestClient):
        assert create_intent(client, user=HOST_ID).status_code == 422


class TestWebhook:
    def test_paid_checkout_end_to_end(self, client: TestClient, app_bundle):
        intent = create_intent(client).json()
        stored = app_bundle["payment_gateway"].intents[intent["provider_payment_id"]]
        body = stripe_event_body(intent["provider_payment_id"], stored["metadata"])

        first = deliver(client, body)
        second = deliver(client, body)

        assert first.status_code == 200, first.json()
        assert second.status_code == 200
        assert first.json()["booking_id"] == second.json()["booking_id"]
        bookings = client.get("/api/v1/bookings", headers=auth(GUEST_ID)).json()["items"]
        assert len(bookings) == 1
        assert bookings[0]["status"] == "CONFIRMED"
        assert bookings[0]["total_price"] == 336

    def test_duplicate_delivery_of_flat_event(self, client: TestClient, app_bundle):
        event = {
            "type": "payment.succeeded",
            "providerPaymentId": "pi_flat",
            "metadata": {
                "listing_id": LISTING_ID,
                "guest_user_id": GUEST_ID,
                "check_in": "2024-09-01",
                "check_out": "2024-09-04",
                "guest_count": 2,
                "total_price": 450,
            },
        }
        for _ in range(2):
            assert deliver(client, json.dumps(event).encode()).status_code == 200

        bookings = list(app_bundle["booking_repo"].bookings.values())
        assert len(bookings) == 1
        assert bookings[0].total_price == 450

    def test_payment_for_taken_dates_needs_review(self, client: TestClient, app_bundle):
        intent = create_intent(client).json()
        stored = app_bundle["payment_gateway"].intents[intent["provider_payment_id"]]
        client.post(
            "/api/v1/bookings",
            json={
                "listing_id": LISTING_ID,
                "check_in": "2024-08-02",
                "check_out": "2024-08-03",
                "guest_count": 1,
            },
            headers=auth(OTHER_GUEST_ID),
        )

        body = stripe_event_body(intent["provider_payment_id"], stored["metadata"])
        response = deliver(client, body)

        assert response.status_code == 200
        assert response.json()["review_required"] is True
        assert response.json()["booking_id"] is None
        assert intent["provider_payment_id"] in app_bundle["review_repo"].reviews

    def test_invalid_metadata_is_rejected_for_retry(self, client: TestClient, app_bundle):
        response = deliver(client, stripe_event_body("pi_bad", {"listing_id": LISTING_ID}))

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_WEBHOOK_PAYLOAD"
        assert app_bundle["booking_repo"].bookings == {}

    def test_garbage_body(self, client: TestClient):
        assert deliver(client, b"not json").status_code == 400
        assert deliver(client, b"").status_code == 400

    def test_failed_payment_is_acknowledged(self, client: TestClient, app_bundle):
        body = stripe_event_body("pi_1", event_type="payment_intent.payment_failed")

        response = deliver(client, body)

        assert response.status_code == 200
        assert response.json()["event_type"] == "payment.failed"
        assert app_bundle["booking_repo"].bookings == {}

    def test_other_events_are_ignored(self, client: TestClient):
        response = deliver(client, json.dumps({"id": "evt_9", "type": "charge.refunded"}).encode())

        assert response.status_code == 200
        assert response.json()["ignored"] is True
