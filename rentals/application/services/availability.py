import logging
from datetime import date

from rentals.application.interfaces.booking_repo import BookingRepo
from rentals.domain.entities.booking import Booking
from rentals.domain.errors import DateRangeUnavailableError
from rentals.domain.value_objects.stay_range import StayRange


def ranges_overlap(a: StayRange, b: StayRange) -> bool:
    return a.overlaps_with(b)


class AvailabilityChecker:
    """
    Answers whether a listing's nights are free.

    The answer is only as fresh as the read: callers that act on it must do
    so in the same transaction, with the listing locked, and still rely on
    the repository's exclusion constraint when inserting.
    """

    def __init__(self, booking_repo: BookingRepo) -> None:
        self._booking_repo = booking_repo
        self._logger = logging.getLogger(__name__)

    async def find_conflicts(
        self, listing_id: str, check_in: date, check_out: date
    ) -> list[Booking]:
        requested = StayRange(check_in=check_in, check_out=check_out)
        existing = await self._booking_repo.list_active_for_listing(listing_id)
        return [
            booking
            for booking in existing
            if booking.is_active and ranges_overlap(booking.stay, requested)
        ]

    async def is_available(self, listing_id: str, check_in: date, check_out: date) -> bool:
        conflicts = await self.find_conflicts(listing_id, check_in, check_out)
        return not conflicts

    async def assert_available(self, listing_id: str, check_in: date, check_out: date) -> None:
        conflicts = await self.find_conflicts(listing_id, check_in, check_out)
        if conflicts:
            self._logger.warning(
                "Requested dates overlap existing bookings",
                extra={
                    "listing_id": listing_id,
                    "check_in": check_in.isoformat(),
                    "check_out": check_out.isoformat(),
                    "conflicting_booking_ids": [b.id for b in conflicts],
                },
            )
            raise DateRangeUnavailableError(listing_id, check_in, check_out)
