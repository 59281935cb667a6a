"""
Infrastructure layer: concrete implementations of the application ports.

- db/: SQLAlchemy tables, engine, transaction manager and SQL repositories
- gateways/: payment provider adapter (Stripe)
- in_memory/: dict-backed implementations for tests and local runs
- services/: identity resolution
"""

from rentals.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from rentals.infrastructure.db.repositories.listing_reader_sql import ListingReaderSQL
from rentals.infrastructure.db.repositories.payment_review_repo_sql import PaymentReviewRepoSQL
from rentals.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from rentals.infrastructure.gateways.stripe_gateway import StripePaymentGateway
from rentals.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryListingReader,
    InMemoryPaymentGateway,
    InMemoryPaymentReviewRepo,
    InMemoryTransactionManager,
)
from rentals.infrastructure.services import TrustedHeaderIdentityResolver

__all__ = [
    # Database - Repositories SQL
    "BookingRepoSQL",
    "ListingReaderSQL",
    "PaymentReviewRepoSQL",
    "SQLAlchemyTransactionManager",
    # Gateways
    "StripePaymentGateway",
    # In-Memory Implementations
    "InMemoryBookingRepo",
    "InMemoryListingReader",
    "InMemoryPaymentGateway",
    "InMemoryPaymentReviewRepo",
    "InMemoryTransactionManager",
    # Services
    "TrustedHeaderIdentityResolver",
]
