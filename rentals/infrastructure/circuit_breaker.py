"""
Circuit breaker for calls to the payment provider.

After ``fail_max`` consecutive failures the breaker opens and calls fail
immediately with CircuitBreakerError until ``reset_timeout`` seconds have
passed; then a single trial call decides whether it closes again.
"""

import logging

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


class StateChangeLogger(CircuitBreakerListener):
    """Logs every state transition of a breaker."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "Circuit breaker state changed",
            extra={
                "breaker_name": self.name,
                "old_state": old_state.name if old_state else None,
                "new_state": new_state.name,
            },
        )


stripe_breaker = CircuitBreaker(
    fail_max=5,
    reset_timeout=60,
    name="stripe_circuit_breaker",
    listeners=[StateChangeLogger("stripe")],
)


__all__ = [
    "stripe_breaker",
    "CircuitBreakerError",
]
