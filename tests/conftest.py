"""
Pytest configuration and shared fixtures.

- In-memory wiring of the reservation core (repos, ledger, reconciler, service)
- SQLite (aiosqlite) engine and sessions for SQL repository tests
- FastAPI TestClient against the in-memory bundle
"""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rentals.api.dependencies import _in_memory_bundle
from rentals.application.interfaces.clock import FakeClock
from rentals.application.interfaces.id_generator import FakeIdGenerator
from rentals.application.services import (
    AvailabilityChecker,
    BookingLedger,
    PaymentReconciler,
    ReservationService,
)
from rentals.domain.entities.listing import Listing
from rentals.infrastructure.circuit_breaker import stripe_breaker
from rentals.infrastructure.db.tables import metadata
from rentals.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryListingReader,
    InMemoryPaymentGateway,
    InMemoryPaymentReviewRepo,
    InMemoryTransactionManager,
)
from tests.factories import make_listing

# ============================================================================
# IN-MEMORY CORE
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def id_generator() -> FakeIdGenerator:
    return FakeIdGenerator()


@pytest.fixture
def listing() -> Listing:
    return make_listing()


@pytest.fixture
def listing_reader(listing: Listing) -> InMemoryListingReader:
    return InMemoryListingReader([listing])


@pytest.fixture
def booking_repo() -> InMemoryBookingRepo:
    return InMemoryBookingRepo()


@pytest.fixture
def review_repo() -> InMemoryPaymentReviewRepo:
    return InMemoryPaymentReviewRepo()


@pytest.fixture
def payment_gateway() -> InMemoryPaymentGateway:
    return InMemoryPaymentGateway()


@pytest.fixture
def availability(booking_repo) -> AvailabilityChecker:
    return AvailabilityChecker(booking_repo=booking_repo)


@pytest.fixture
def ledger(booking_repo, availability, id_generator, clock) -> BookingLedger:
    return BookingLedger(
        booking_repo=booking_repo,
        availability=availability,
        transaction_manager=InMemoryTransactionManager(),
        id_generator=id_generator,
        clock=clock,
    )


@pytest.fixture
def reconciler(ledger, booking_repo, review_repo, clock) -> PaymentReconciler:
    return PaymentReconciler(
        booking_ledger=ledger,
        booking_repo=booking_repo,
        review_repo=review_repo,
        transaction_manager=InMemoryTransactionManager(),
        clock=clock,
    )


@pytest.fixture
def reservation_service(
    listing_reader, ledger, availability, payment_gateway
) -> ReservationService:
    return ReservationService(
        listing_reader=listing_reader,
        booking_ledger=ledger,
        availability=availability,
        payment_gateway=payment_gateway,
        currency="try",
        service_fee_rate=0.12,
    )


# ============================================================================
# SQL (aiosqlite)
# ============================================================================


@pytest_asyncio.fixture
async def sql_engine(tmp_path):
    """
    File-backed SQLite so that several sessions see the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'rentals.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def sql_sessionmaker(sql_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(sql_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def sql_session(sql_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with sql_sessionmaker() as session:
        yield session


# ============================================================================
# HTTP CLIENT
# ============================================================================


@pytest.fixture
def app_bundle():
    """Fresh in-memory stores behind the API, seeded with one listing per host."""
    _in_memory_bundle.cache_clear()
    bundle = _in_memory_bundle()
    bundle["listing_reader"].add(make_listing())
    bundle["listing_reader"].add(make_listing(id="lst-2", host_id="host-2", nightly_price=150))
    yield bundle
    _in_memory_bundle.cache_clear()


@pytest.fixture
def client(app_bundle) -> Generator[TestClient, None, None]:
    from rentals.main import app

    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# HOOKS
# ============================================================================


@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """Each test starts with a closed breaker."""
    stripe_breaker.close()
    yield
    stripe_breaker.close()
