"""Infrastructure services."""

from rentals.infrastructure.services.trusted_header_identity import TrustedHeaderIdentityResolver

__all__ = [
    "TrustedHeaderIdentityResolver",
]
