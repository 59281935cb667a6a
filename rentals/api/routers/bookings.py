from fastapi import APIRouter, Depends, status

from rentals.api.dependencies import get_current_actor, get_services
from rentals.api.schemas.bookings import (
    BookingAction,
    BookingListResponse,
    BookingResponse,
    BookingStatusResponse,
    CreateBookingRequest,
    CreateBookingResponse,
    UpdateBookingRequest,
)
from rentals.application.interfaces.identity import Actor

router = APIRouter()


@router.post(
    "/bookings",
    response_model=CreateBookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: CreateBookingRequest,
    actor: Actor = Depends(get_current_actor),
    services=Depends(get_services),
) -> CreateBookingResponse:
    booking = await services["reservations"].request_booking(
        listing_id=payload.listing_id,
        guest_user_id=actor.user_id,
        check_in=payload.check_in,
        check_out=payload.check_out,
        guest_count=payload.guest_count,
    )
    return CreateBookingResponse(
        id=booking.id, total_price=booking.total_price, status=booking.status.value
    )


@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(
    actor: Actor = Depends(get_current_actor),
    services=Depends(get_services),
) -> BookingListResponse:
    bookings = await services["reservations"].list_bookings(actor)
    return BookingListResponse(items=[BookingResponse.from_booking(b) for b in bookings])


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    actor: Actor = Depends(get_current_actor),
    services=Depends(get_services),
) -> BookingResponse:
    booking = await services["reservations"].get_booking(booking_id, actor)
    return BookingResponse.from_booking(booking)


@router.delete("/bookings/{booking_id}", response_model=BookingStatusResponse)
async def cancel_booking(
    booking_id: str,
    actor: Actor = Depends(get_current_actor),
    services=Depends(get_services),
) -> BookingStatusResponse:
    booking = await services["reservations"].cancel_booking(booking_id, actor)
    return BookingStatusResponse(id=booking.id, status=booking.status.value)


@router.patch("/bookings/{booking_id}", response_model=BookingStatusResponse)
async def update_booking(
    booking_id: str,
    payload: UpdateBookingRequest,
    actor: Actor = Depends(get_current_actor),
    services=Depends(get_services),
) -> BookingStatusResponse:
    if payload.action == BookingAction.CONFIRM:
        booking = await services["reservations"].confirm_booking(booking_id, actor)
    else:
        booking = await services["reservations"].cancel_booking(booking_id, actor)
    return BookingStatusResponse(id=booking.id, status=booking.status.value)
