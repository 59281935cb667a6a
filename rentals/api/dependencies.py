from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.deps import AsyncSessionLocal
from rentals.application.interfaces.clock import SystemClock
from rentals.application.interfaces.id_generator import RandomIdGenerator
from rentals.application.interfaces.identity import Actor, IdentityResolver
from rentals.application.services import (
    AvailabilityChecker,
    BookingLedger,
    PaymentReconciler,
    ReservationService,
)
from rentals.application.use_cases.handle_payment_webhook import HandlePaymentWebhookUseCase
from rentals.config import Settings, get_settings
from rentals.domain.errors import NotAuthenticatedError
from rentals.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from rentals.infrastructure.db.repositories.listing_reader_sql import ListingReaderSQL
from rentals.infrastructure.db.repositories.payment_review_repo_sql import PaymentReviewRepoSQL
from rentals.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from rentals.infrastructure.demo_data import demo_listings
from rentals.infrastructure.gateways.stripe_gateway import StripePaymentGateway
from rentals.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryListingReader,
    InMemoryPaymentGateway,
    InMemoryPaymentReviewRepo,
    InMemoryTransactionManager,
)
from rentals.infrastructure.services import TrustedHeaderIdentityResolver

USER_ID_HEADER = "X-User-Id"


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


@lru_cache(maxsize=1)
def _in_memory_bundle():
    return {
        "listing_reader": InMemoryListingReader(demo_listings()),
        "booking_repo": InMemoryBookingRepo(),
        "review_repo": InMemoryPaymentReviewRepo(),
        "payment_gateway": InMemoryPaymentGateway(),
        "tx_manager": InMemoryTransactionManager(),
    }


def get_identity_resolver() -> IdentityResolver:
    return TrustedHeaderIdentityResolver()


async def get_current_actor(
    user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Actor:
    actor = await resolver.resolve(user_id)
    if actor is None:
        raise NotAuthenticatedError()
    return actor


def _build_services(
    settings: Settings,
    listing_reader,
    booking_repo,
    review_repo,
    payment_gateway,
    tx_manager,
):
    availability = AvailabilityChecker(booking_repo=booking_repo)
    ledger = BookingLedger(
        booking_repo=booking_repo,
        availability=availability,
        transaction_manager=tx_manager,
        id_generator=RandomIdGenerator(),
        clock=SystemClock(),
    )
    reconciler = PaymentReconciler(
        booking_ledger=ledger,
        booking_repo=booking_repo,
        review_repo=review_repo,
        transaction_manager=tx_manager,
        clock=SystemClock(),
    )
    return {
        "ledger": ledger,
        "reconciler": reconciler,
        "reservations": ReservationService(
            listing_reader=listing_reader,
            booking_ledger=ledger,
            availability=availability,
            payment_gateway=payment_gateway,
            currency=settings.currency,
            service_fee_rate=settings.service_fee_rate,
        ),
        "handle_webhook": HandlePaymentWebhookUseCase(
            payment_gateway=payment_gateway,
            reconciler=reconciler,
            webhook_secret=settings.stripe_webhook_secret,
        ),
    }


def get_services(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
):
    if settings.use_in_memory:
        bundle = _in_memory_bundle()
        return _build_services(
            settings,
            listing_reader=bundle["listing_reader"],
            booking_repo=bundle["booking_repo"],
            review_repo=bundle["review_repo"],
            payment_gateway=bundle["payment_gateway"],
            tx_manager=bundle["tx_manager"],
        )

    if not session:
        raise RuntimeError("DB session not available")

    return _build_services(
        settings,
        listing_reader=ListingReaderSQL(session),
        booking_repo=BookingRepoSQL(session),
        review_repo=PaymentReviewRepoSQL(session),
        payment_gateway=StripePaymentGateway(
            api_key=settings.stripe_secret_key,
            timeout_seconds=settings.payment_timeout_seconds,
        ),
        tx_manager=SQLAlchemyTransactionManager(session),
    )
