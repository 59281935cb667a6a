import asyncio
import random
from datetime import date, timedelta
from itertools import combinations

import pytest

from rentals.application.services import AvailabilityChecker, BookingLedger
from rentals.domain.entities.booking import BookingStatus
from rentals.domain.errors import (
    BookingNotFoundError,
    ConcurrencyConflictError,
    DateRangeUnavailableError,
    InvalidInputError,
    InvalidTransitionError,
)
from rentals.infrastructure.in_memory import InMemoryBookingRepo, InMemoryTransactionManager
from tests.factories import GUEST_ID, OTHER_GUEST_ID, d


class InterleavingBookingRepo(InMemoryBookingRepo):
    """Yields to the event loop while reading, so concurrent requests all pass the check."""

    async def list_active_for_listing(self, listing_id):
        result = await super().list_active_for_listing(listing_id)
        await asyncio.sleep(0)
        return result


class TestCreate:
    async def test_direct_booking_is_pending_with_price(self, ledger, listing):
        booking = await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)

        assert booking.status == BookingStatus.PENDING
        assert booking.total_price == 300
        assert booking.nights == 3
        assert booking.provider_payment_id is None
        assert booking.id == "bk-000001"

    async def test_overlapping_request_is_rejected(self, ledger, listing):
        await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)

        with pytest.raises(DateRangeUnavailableError) as exc_info:
            await ledger.create(listing, OTHER_GUEST_ID, d("2024-07-03"), d("2024-07-05"), 1)

        assert exc_info.value.code == "DATE_RANGE_UNAVAILABLE"

    async def test_back_to_back_stays_are_accepted(self, ledger, listing):
        await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)
        await ledger.create(listing, OTHER_GUEST_ID, d("2024-07-04"), d("2024-07-06"), 1)

    async def test_cancelled_booking_frees_its_nights(self, ledger, listing):
        first = await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)
        await ledger.cancel(first.id)

        second = await ledger.create(listing, OTHER_GUEST_ID, d("2024-07-02"), d("2024-07-03"), 1)

        assert second.status == BookingStatus.PENDING

    @pytest.mark.parametrize(
        "check_in, check_out, guests",
        [
            ("2024-07-04", "2024-07-01", 1),
            ("2024-07-01", "2024-07-01", 1),
            ("2024-07-01", "2024-07-02", 0),
            ("2024-07-01", "2024-07-02", -3),
        ],
    )
    async def test_invalid_input(self, ledger, listing, check_in, check_out, guests):
        with pytest.raises(InvalidInputError):
            await ledger.create(listing, GUEST_ID, d(check_in), d(check_out), guests)

    async def test_paid_booking_starts_confirmed(self, ledger):
        booking = await ledger.create_confirmed(
            listing_id="lst-1",
            guest_user_id=GUEST_ID,
            check_in=d("2024-08-01"),
            check_out=d("2024-08-04"),
            guest_count=2,
            total_price=450,
            provider_payment_id="pi_1",
        )

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.total_price == 450
        assert booking.provider_payment_id == "pi_1"


class TestTransitions:
    async def test_cancel_twice_is_a_no_op(self, ledger, listing, booking_repo):
        booking = await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)

        first = await ledger.cancel(booking.id)
        second = await ledger.cancel(booking.id)

        assert first.status == BookingStatus.CANCELLED
        assert second.status == BookingStatus.CANCELLED
        assert (await booking_repo.get_by_id(booking.id)).status == BookingStatus.CANCELLED

    async def test_confirm_cancelled_fails(self, ledger, listing):
        booking = await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)
        await ledger.cancel(booking.id)

        with pytest.raises(InvalidTransitionError):
            await ledger.confirm(booking.id)

    async def test_confirm_twice_is_a_no_op(self, ledger, listing, clock):
        booking = await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)

        clock.advance(minutes=5)
        first = await ledger.confirm(booking.id)
        clock.advance(minutes=5)
        second = await ledger.confirm(booking.id)

        assert first.status == second.status == BookingStatus.CONFIRMED
        assert second.updated_at == first.updated_at

    async def test_unknown_booking(self, ledger):
        with pytest.raises(BookingNotFoundError):
            await ledger.cancel("missing")
        with pytest.raises(BookingNotFoundError):
            await ledger.confirm("missing")
        with pytest.raises(BookingNotFoundError):
            await ledger.get("missing")

    async def test_price_is_not_recomputed_on_confirm(self, ledger, listing):
        booking = await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)

        confirmed = await ledger.confirm(booking.id)

        assert confirmed.total_price == 300


class TestTransactionScope:
    async def test_rejected_request_rolls_back(
        self, booking_repo, availability, id_generator, clock, listing
    ):
        tx = InMemoryTransactionManager()
        ledger = BookingLedger(
            booking_repo=booking_repo,
            availability=availability,
            transaction_manager=tx,
            id_generator=id_generator,
            clock=clock,
        )

        await ledger.create(listing, GUEST_ID, d("2024-07-01"), d("2024-07-04"), 2)
        with pytest.raises(DateRangeUnavailableError):
            await ledger.create(listing, OTHER_GUEST_ID, d("2024-07-02"), d("2024-07-03"), 1)

        assert tx.commits == 1
        assert tx.rollbacks == 1


class TestConcurrency:
    @pytest.fixture
    def racing_ledger(self, id_generator, clock):
        repo = InterleavingBookingRepo()
        ledger = BookingLedger(
            booking_repo=repo,
            availability=AvailabilityChecker(repo),
            transaction_manager=InMemoryTransactionManager(),
            id_generator=id_generator,
            clock=clock,
        )
        return ledger, repo

    async def test_losers_of_a_race_get_a_conflict(self, racing_ledger, listing):
        ledger, repo = racing_ledger

        results = await asyncio.gather(
            *[
                ledger.create(listing, f"guest-{i}", d("2024-07-01"), d("2024-07-04"), 1)
                for i in range(5)
            ],
            return_exceptions=True,
        )

        created = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, ConcurrencyConflictError)]
        assert len(created) == 1
        assert len(conflicts) == 4
        assert len(await repo.list_active_for_listing(listing.id)) == 1

    async def test_accepted_bookings_never_overlap(self, racing_ledger, listing):
        ledger, repo = racing_ledger
        rng = random.Random(1234)
        start = date(2024, 7, 1)

        for _ in range(20):
            requests = []
            for i in range(12):
                check_in = start + timedelta(days=rng.randint(0, 20))
                check_out = check_in + timedelta(days=rng.randint(1, 5))
                requests.append(ledger.create(listing, f"guest-{i}", check_in, check_out, 1))
            results = await asyncio.gather(*requests, return_exceptions=True)

            for result in results:
                if isinstance(result, Exception):
                    assert isinstance(result, DateRangeUnavailableError)

            active = await repo.list_active_for_listing(listing.id)
            for a, b in combinations(active, 2):
                assert not a.stay.overlaps_with(b.stay), (a, b)
            start += timedelta(days=40)
