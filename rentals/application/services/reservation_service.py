import logging
from datetime import date
from typing import Sequence

from rentals.application.dtos.checkout import PaymentIntentHandle
from rentals.application.dtos.payment_metadata import PaymentMetadata
from rentals.application.interfaces.identity import Actor
from rentals.application.interfaces.listing_reader import ListingReader
from rentals.application.interfaces.payment_gateway import PaymentGateway
from rentals.application.services.availability import AvailabilityChecker
from rentals.application.services.booking_ledger import BookingLedger, validate_booking_request
from rentals.domain.entities.booking import Booking
from rentals.domain.entities.listing import Listing
from rentals.domain.errors import (
    DateRangeUnavailableError,
    InvalidInputError,
    ListingNotFoundError,
    NotAuthorizedError,
)
from rentals.domain.pricing import compute_total


class ReservationService:
    """Entry points for guests and hosts: direct booking, paid checkout, cancel, confirm."""

    def __init__(
        self,
        listing_reader: ListingReader,
        booking_ledger: BookingLedger,
        availability: AvailabilityChecker,
        payment_gateway: PaymentGateway,
        currency: str,
        service_fee_rate: float,
    ) -> None:
        self._listing_reader = listing_reader
        self._booking_ledger = booking_ledger
        self._availability = availability
        self._payment_gateway = payment_gateway
        self._currency = currency
        self._service_fee_rate = service_fee_rate
        self._logger = logging.getLogger(__name__)

    async def _load_listing(self, listing_id: str) -> Listing:
        listing = await self._listing_reader.get_listing(listing_id)
        if listing is None or not listing.active:
            raise ListingNotFoundError(listing_id)
        return listing

    async def request_booking(
        self,
        listing_id: str,
        guest_user_id: str,
        check_in: date,
        check_out: date,
        guest_count: int,
    ) -> Booking:
        listing = await self._load_listing(listing_id)
        return await self._booking_ledger.create(
            listing=listing,
            guest_user_id=guest_user_id,
            check_in=check_in,
            check_out=check_out,
            guest_count=guest_count,
        )

    async def begin_paid_checkout(
        self,
        listing_id: str,
        guest_user_id: str,
        check_in: date,
        check_out: date,
        guest_count: int,
    ) -> PaymentIntentHandle:
        """
        Creates a provider payment intent carrying the booking parameters.

        No booking row exists until the provider reports the payment as
        succeeded (see PaymentReconciler). Availability is checked here only
        to avoid charging for nights that are already gone; it is checked
        again when the payment lands.
        """
        listing = await self._load_listing(listing_id)
        if listing.is_hosted_by(guest_user_id):
            raise InvalidInputError("listing_id", "hosts cannot book their own listing")
        stay = validate_booking_request(check_in, check_out, guest_count)
        if not await self._availability.is_available(listing.id, stay.check_in, stay.check_out):
            raise DateRangeUnavailableError(listing.id, stay.check_in, stay.check_out)

        quote = compute_total(
            listing.nightly_price, stay.check_in, stay.check_out, fee_rate=self._service_fee_rate
        )
        metadata = PaymentMetadata(
            listing_id=listing.id,
            guest_user_id=guest_user_id,
            check_in=stay.check_in,
            check_out=stay.check_out,
            guest_count=guest_count,
            total_price=quote.total,
            nights=quote.nights,
            subtotal=quote.subtotal,
            fee=quote.fee,
            currency=self._currency,
        )
        intent = await self._payment_gateway.create_payment_intent(
            amount=quote.total,
            currency=self._currency,
            metadata=metadata.to_provider_metadata(),
            description=f"Booking for {listing.title or listing.id}",
        )
        self._logger.info(
            "Payment intent created",
            extra={
                "provider_payment_id": intent.provider_payment_id,
                "listing_id": listing.id,
                "total_price": quote.total,
            },
        )
        return PaymentIntentHandle(
            client_secret=intent.client_secret,
            provider_payment_id=intent.provider_payment_id,
            nights=quote.nights,
            subtotal=quote.subtotal,
            fee=quote.fee,
            total_price=quote.total,
            currency=self._currency,
        )

    async def cancel_booking(self, booking_id: str, actor: Actor) -> Booking:
        """Only the guest who owns the booking may cancel it."""
        booking = await self._booking_ledger.get(booking_id)
        if booking.guest_user_id != actor.user_id:
            raise NotAuthorizedError(actor.user_id, booking_id, "cancel")
        return await self._booking_ledger.cancel(booking_id)

    async def confirm_booking(self, booking_id: str, actor: Actor) -> Booking:
        """Only the listing's host may confirm a pending booking."""
        booking = await self._booking_ledger.get(booking_id)
        listing = await self._listing_reader.get_listing(booking.listing_id)
        if listing is None or not listing.is_hosted_by(actor.user_id):
            raise NotAuthorizedError(actor.user_id, booking_id, "confirm")
        return await self._booking_ledger.confirm(booking_id)

    async def get_booking(self, booking_id: str, actor: Actor) -> Booking:
        booking = await self._booking_ledger.get(booking_id)
        if booking.guest_user_id == actor.user_id:
            return booking
        listing = await self._listing_reader.get_listing(booking.listing_id)
        if listing is None or not listing.is_hosted_by(actor.user_id):
            raise NotAuthorizedError(actor.user_id, booking_id, "view")
        return booking

    async def list_bookings(self, actor: Actor) -> Sequence[Booking]:
        return await self._booking_ledger.list_for_guest(actor.user_id)
