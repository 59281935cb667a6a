import random
from datetime import datetime, timezone

import pytest

from rentals.domain.entities.booking import Booking, BookingStatus
from rentals.domain.errors import InvalidTransitionError
from tests.factories import d

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_booking(status: BookingStatus = BookingStatus.PENDING) -> Booking:
    return Booking(
        id="bk-1",
        listing_id="lst-1",
        guest_user_id="guest-1",
        check_in=d("2024-07-01"),
        check_out=d("2024-07-04"),
        guest_count=2,
        total_price=300,
        status=status,
        created_at=NOW,
        updated_at=NOW,
    )


class TestBookingStateMachine:
    def test_confirm_pending(self):
        booking = make_booking()

        assert booking.confirm(NOW) is True
        assert booking.status == BookingStatus.CONFIRMED

    def test_confirm_confirmed_is_a_no_op(self):
        booking = make_booking(BookingStatus.CONFIRMED)

        assert booking.confirm(NOW) is False
        assert booking.status == BookingStatus.CONFIRMED

    def test_confirm_cancelled_fails(self):
        booking = make_booking(BookingStatus.CANCELLED)

        with pytest.raises(InvalidTransitionError) as exc_info:
            booking.confirm(NOW)

        assert exc_info.value.code == "INVALID_TRANSITION"
        assert exc_info.value.current_status == "CANCELLED"

    @pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CONFIRMED])
    def test_cancel_active(self, status):
        booking = make_booking(status)

        assert booking.cancel(NOW) is True
        assert booking.is_cancelled
        assert not booking.is_active

    def test_cancel_cancelled_is_a_no_op(self):
        booking = make_booking(BookingStatus.CANCELLED)

        assert booking.cancel(NOW) is False
        assert booking.status == BookingStatus.CANCELLED

    def test_cancelled_is_absorbing(self):
        rng = random.Random(7)
        for _ in range(200):
            booking = make_booking(BookingStatus.CANCELLED)
            for _ in range(10):
                operation = rng.choice(["confirm", "cancel"])
                try:
                    getattr(booking, operation)(NOW)
                except InvalidTransitionError:
                    pass
                assert booking.status == BookingStatus.CANCELLED


def test_nights_and_overlap():
    booking = make_booking()

    assert booking.nights == 3
    assert booking.overlaps(d("2024-07-03"), d("2024-07-05"))
    assert not booking.overlaps(d("2024-07-04"), d("2024-07-06"))
