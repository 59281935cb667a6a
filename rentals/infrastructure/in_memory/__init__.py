"""In-memory implementations for tests and demos."""

from rentals.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from rentals.infrastructure.in_memory.listing_reader import InMemoryListingReader
from rentals.infrastructure.in_memory.payment_gateway import (
    StubPaymentGateway as InMemoryPaymentGateway,
)
from rentals.infrastructure.in_memory.payment_review_repo import InMemoryPaymentReviewRepo
from rentals.infrastructure.in_memory.transaction_manager import InMemoryTransactionManager

__all__ = [
    # Repositories
    "InMemoryBookingRepo",
    "InMemoryListingReader",
    "InMemoryPaymentReviewRepo",
    # Gateways
    "InMemoryPaymentGateway",
    # Infrastructure
    "InMemoryTransactionManager",
]
