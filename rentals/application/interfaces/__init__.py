"""Ports of the application layer."""

from rentals.application.interfaces.booking_repo import BookingRepo
from rentals.application.interfaces.clock import Clock, FakeClock, SystemClock
from rentals.application.interfaces.id_generator import (
    FakeIdGenerator,
    IdGenerator,
    RandomIdGenerator,
    booking_id_for_payment,
)
from rentals.application.interfaces.identity import Actor, IdentityResolver
from rentals.application.interfaces.listing_reader import ListingReader
from rentals.application.interfaces.payment_gateway import PaymentGateway, PaymentIntentResult
from rentals.application.interfaces.payment_review_repo import PaymentReviewRepo
from rentals.application.interfaces.transaction_manager import TransactionManager

__all__ = [
    # Repositories
    "BookingRepo",
    "ListingReader",
    "PaymentReviewRepo",
    # Gateways
    "PaymentGateway",
    "PaymentIntentResult",
    # Identity
    "Actor",
    "IdentityResolver",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "RandomIdGenerator",
    "FakeIdGenerator",
    "booking_id_for_payment",
]
