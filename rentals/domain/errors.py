"""Domain exceptions for the reservation core."""


class DomainError(Exception):
    """Base class for every domain error."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Input errors ===


class InvalidInputError(DomainError):
    """Malformed request: bad dates, non-positive guest count, and similar."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Invalid '{field}': {message}",
            code="INVALID_INPUT",
        )
        self.field = field


class InvalidDateRangeError(InvalidInputError):
    """check_out is not strictly after check_in."""

    def __init__(self, check_in: object, check_out: object):
        super().__init__(
            field="check_out",
            message=f"must be after check_in ({check_in} >= {check_out})",
        )
        self.check_in = check_in
        self.check_out = check_out


class InvalidRangeError(InvalidInputError):
    """A stay that covers fewer than one night."""

    def __init__(self, nights: int):
        super().__init__(field="nights", message=f"a stay needs at least 1 night, got {nights}")
        self.nights = nights


# === Listing errors ===


class ListingNotFoundError(DomainError):
    """The listing does not exist or is not active."""

    def __init__(self, listing_id: str):
        super().__init__(
            message=f"Listing not found: {listing_id}",
            code="LISTING_NOT_FOUND",
        )
        self.listing_id = listing_id


# === Availability errors ===


class DateRangeUnavailableError(DomainError):
    """The requested nights overlap an active booking."""

    def __init__(self, listing_id: str, check_in: object, check_out: object):
        super().__init__(
            message=f"Selected dates are not available for listing {listing_id}: "
            f"{check_in} -> {check_out}",
            code="DATE_RANGE_UNAVAILABLE",
        )
        self.listing_id = listing_id
        self.check_in = check_in
        self.check_out = check_out


class ConcurrencyConflictError(DateRangeUnavailableError):
    """The exclusion constraint rejected an insert that passed the availability check."""


# === Booking state errors ===


class InvalidTransitionError(DomainError):
    """The booking state machine does not allow the requested move."""

    def __init__(
        self,
        booking_id: str,
        current_status: str | None,
        operation: str,
        message: str | None = None,
        code: str = "INVALID_TRANSITION",
    ):
        super().__init__(
            message=message
            or f"Cannot {operation} booking {booking_id}: current status '{current_status}'",
            code=code,
        )
        self.booking_id = booking_id
        self.current_status = current_status
        self.operation = operation


class BookingNotFoundError(InvalidTransitionError):
    """No booking with that id."""

    def __init__(self, booking_id: str, operation: str = "find"):
        super().__init__(
            booking_id=booking_id,
            current_status=None,
            operation=operation,
            message=f"Booking not found: {booking_id}",
            code="BOOKING_NOT_FOUND",
        )


# === Authorization errors ===


class NotAuthenticatedError(DomainError):
    """No verified identity accompanies the request."""

    def __init__(self) -> None:
        super().__init__(message="Unauthorized", code="NOT_AUTHENTICATED")


class NotAuthorizedError(DomainError):
    """The actor may not act on this booking."""

    def __init__(self, actor_id: str, booking_id: str, operation: str):
        super().__init__(
            message=f"User {actor_id} may not {operation} booking {booking_id}",
            code="NOT_AUTHORIZED",
        )
        self.actor_id = actor_id
        self.booking_id = booking_id
        self.operation = operation


# === Payment errors ===


class InvalidWebhookPayloadError(DomainError):
    """Payment event or its metadata cannot be turned into a booking."""

    def __init__(self, message: str, provider_payment_id: str | None = None):
        super().__init__(message=message, code="INVALID_WEBHOOK_PAYLOAD")
        self.provider_payment_id = provider_payment_id


class DuplicatePaymentReferenceError(DomainError):
    """A booking or payment review already carries this provider payment id."""

    def __init__(self, provider_payment_id: str):
        super().__init__(
            message=f"Payment already reconciled: {provider_payment_id}",
            code="DUPLICATE_PAYMENT_REFERENCE",
        )
        self.provider_payment_id = provider_payment_id


class PaymentRequiresReviewError(DomainError):
    """A succeeded payment could not become a booking and was flagged for review."""

    def __init__(self, provider_payment_id: str, reason: str):
        super().__init__(
            message=f"Payment {provider_payment_id} flagged for review: {reason}",
            code="PAYMENT_REQUIRES_REVIEW",
        )
        self.provider_payment_id = provider_payment_id
        self.reason = reason


class PaymentProviderError(DomainError):
    """The payment provider failed, timed out or is unavailable."""

    def __init__(self, message: str):
        super().__init__(message=message, code="PAYMENT_PROVIDER_ERROR")
