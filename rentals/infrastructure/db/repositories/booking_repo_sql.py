from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.application.interfaces.booking_repo import BookingRepo
from rentals.domain.constants import ACTIVE_BOOKING_STATUSES
from rentals.domain.entities.booking import Booking, BookingStatus
from rentals.domain.errors import ConcurrencyConflictError, DuplicatePaymentReferenceError
from rentals.infrastructure.db.tables import booking_nights, bookings, listings


def _aware(value: datetime) -> datetime:
    # SQLite drops the offset; everything is stored in UTC.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _row_to_booking(row: Mapping[str, Any]) -> Booking:
    return Booking(
        id=row["id"],
        listing_id=row["listing_id"],
        guest_user_id=row["guest_user_id"],
        check_in=row["check_in"],
        check_out=row["check_out"],
        guest_count=row["guest_count"],
        total_price=row["total_price"],
        status=BookingStatus(row["status"]),
        provider_payment_id=row["provider_payment_id"],
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row["updated_at"]),
    )


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _fetch_one(self, stmt) -> Booking | None:
        result = await self._session.execute(stmt.limit(1))
        row = result.mappings().first()
        return _row_to_booking(row) if row else None

    async def get_by_id(self, booking_id: str) -> Booking | None:
        return await self._fetch_one(select(bookings).where(bookings.c.id == booking_id))

    async def get_by_payment_reference(self, provider_payment_id: str) -> Booking | None:
        return await self._fetch_one(
            select(bookings).where(bookings.c.provider_payment_id == provider_payment_id)
        )

    async def list_active_for_listing(self, listing_id: str) -> Sequence[Booking]:
        stmt = select(bookings).where(
            bookings.c.listing_id == listing_id,
            bookings.c.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        result = await self._session.execute(stmt)
        return [_row_to_booking(row) for row in result.mappings().all()]

    async def list_for_guest(self, guest_user_id: str) -> Sequence[Booking]:
        stmt = (
            select(bookings)
            .where(bookings.c.guest_user_id == guest_user_id)
            .order_by(bookings.c.check_in, bookings.c.id)
        )
        result = await self._session.execute(stmt)
        return [_row_to_booking(row) for row in result.mappings().all()]

    async def lock_listing(self, listing_id: str) -> None:
        # Row lock on PostgreSQL/MySQL; SQLite ignores FOR UPDATE and relies
        # on the booking_nights unique key alone.
        stmt = select(listings.c.id).where(listings.c.id == listing_id).with_for_update()
        await self._session.execute(stmt)

    async def insert(self, booking: Booking) -> None:
        try:
            await self._session.execute(
                insert(bookings).values(
                    id=booking.id,
                    listing_id=booking.listing_id,
                    guest_user_id=booking.guest_user_id,
                    check_in=booking.check_in,
                    check_out=booking.check_out,
                    guest_count=booking.guest_count,
                    total_price=booking.total_price,
                    status=booking.status.value,
                    provider_payment_id=booking.provider_payment_id,
                    created_at=booking.created_at,
                    updated_at=booking.updated_at,
                )
            )
        except IntegrityError as exc:
            if booking.provider_payment_id:
                raise DuplicatePaymentReferenceError(booking.provider_payment_id) from exc
            raise

        if not booking.is_active:
            return
        night_rows = [
            {"listing_id": booking.listing_id, "night": night, "booking_id": booking.id}
            for night in booking.stay.each_night()
        ]
        try:
            await self._session.execute(insert(booking_nights), night_rows)
        except IntegrityError as exc:
            raise ConcurrencyConflictError(
                booking.listing_id, booking.check_in, booking.check_out
            ) from exc

    async def mark_confirmed(self, booking_id: str, updated_at: datetime) -> bool:
        stmt = (
            update(bookings)
            .where(
                bookings.c.id == booking_id,
                bookings.c.status == BookingStatus.PENDING.value,
            )
            .values(status=BookingStatus.CONFIRMED.value, updated_at=updated_at)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def mark_cancelled(self, booking_id: str, updated_at: datetime) -> bool:
        stmt = (
            update(bookings)
            .where(
                bookings.c.id == booking_id,
                bookings.c.status.in_(ACTIVE_BOOKING_STATUSES),
            )
            .values(status=BookingStatus.CANCELLED.value, updated_at=updated_at)
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:
            return False
        await self._session.execute(
            delete(booking_nights).where(booking_nights.c.booking_id == booking_id)
        )
        return True
