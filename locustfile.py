import random
import uuid
from datetime import date, timedelta

from locust import HttpUser, between, task

# Listing seeded by scripts/seed_db.py
LISTING_ID = "lst-bosphorus"
WINDOW_START = date(2030, 1, 1)


class GuestUser(HttpUser):
    """
    Many guests competing for the same listing over a short window.

    Expect mostly 409 responses; the number of 201s must never exceed what
    fits in the window without overlap.
    """

    wait_time = between(0.1, 0.5)

    def on_start(self):
        self.headers = {"X-User-Id": f"guest-{uuid.uuid4().hex[:8]}"}

    @task
    def request_booking(self):
        check_in = WINDOW_START + timedelta(days=random.randint(0, 30))
        check_out = check_in + timedelta(days=random.randint(1, 5))
        with self.client.post(
            "/api/v1/bookings",
            json={
                "listing_id": LISTING_ID,
                "check_in": check_in.isoformat(),
                "check_out": check_out.isoformat(),
                "guest_count": 2,
            },
            headers=self.headers,
            name="/api/v1/bookings",
            catch_response=True,
        ) as response:
            if response.status_code in (201, 409):
                response.success()
