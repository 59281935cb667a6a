BOOKING_STATUS_PENDING = "PENDING"
BOOKING_STATUS_CONFIRMED = "CONFIRMED"
BOOKING_STATUS_CANCELLED = "CANCELLED"

# Statuses that occupy nights on a listing's calendar.
ACTIVE_BOOKING_STATUSES = (BOOKING_STATUS_PENDING, BOOKING_STATUS_CONFIRMED)

PAYMENT_EVENT_SUCCEEDED = "payment.succeeded"
PAYMENT_EVENT_FAILED = "payment.failed"

# Provider event types mapped onto the two events the reconciler understands.
PROVIDER_EVENT_TYPES = {
    "payment_intent.succeeded": PAYMENT_EVENT_SUCCEEDED,
    "payment_intent.payment_failed": PAYMENT_EVENT_FAILED,
    PAYMENT_EVENT_SUCCEEDED: PAYMENT_EVENT_SUCCEEDED,
    PAYMENT_EVENT_FAILED: PAYMENT_EVENT_FAILED,
}
