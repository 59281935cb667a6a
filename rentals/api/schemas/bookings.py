from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, constr

from rentals.domain.entities.booking import Booking


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    listing_id: constr(strip_whitespace=True, min_length=1, max_length=64)
    check_in: date
    check_out: date
    guest_count: int


class CreateBookingResponse(BaseModel):
    id: str
    total_price: int
    status: str


class BookingAction(str, Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"


class UpdateBookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    action: BookingAction


class BookingStatusResponse(BaseModel):
    id: str
    status: str


class BookingResponse(BaseModel):
    id: str
    listing_id: str
    guest_user_id: str
    check_in: date
    check_out: date
    nights: int
    guest_count: int
    total_price: int
    status: str
    provider_payment_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            listing_id=booking.listing_id,
            guest_user_id=booking.guest_user_id,
            check_in=booking.check_in,
            check_out=booking.check_out,
            nights=booking.nights,
            guest_count=booking.guest_count,
            total_price=booking.total_price,
            status=booking.status.value,
            provider_payment_id=booking.provider_payment_id,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingListResponse(BaseModel):
    items: list[BookingResponse]
