"""
Circuit Breaker configuration for external provider calls.

One breaker per provider family (inventory, payment, notification) so a
failing catalog API never blocks checkout and vice versa.

Circuit Breaker Pattern:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many failures, requests fail immediately
- HALF_OPEN: Testing if service recovered, limited requests allowed

Async adapters guard their provider calls with ``breaker.calling()``, which
records the outcome of the awaited block as a success or failure.
"""

import logging

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


inventory_breaker = CircuitBreaker(
    fail_max=5,  # Open circuit after 5 consecutive failures
    reset_timeout=60,  # Wait 60 seconds before attempting recovery
    name="inventory_circuit_breaker",
)

payment_breaker = CircuitBreaker(
    fail_max=5,
    reset_timeout=60,
    name="payment_circuit_breaker",
)

notification_breaker = CircuitBreaker(
    fail_max=5,
    reset_timeout=30,
    name="notification_circuit_breaker",
)


def log_circuit_state_change(breaker_name: str, old_state: str, new_state: str):
    logger.warning(
        "Circuit breaker state changed",
        extra={
            "breaker_name": breaker_name,
            "old_state": old_state,
            "new_state": new_state,
        }
    )


class StateChangeLogger(CircuitBreakerListener):
    """Logs circuit breaker state changes."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        log_circuit_state_change(
            self.name,
            old_state.name if old_state else "none",
            new_state.name,
        )


inventory_breaker.add_listener(StateChangeLogger("inventory"))
payment_breaker.add_listener(StateChangeLogger("payment"))
notification_breaker.add_listener(StateChangeLogger("notification"))


ALL_BREAKERS = (inventory_breaker, payment_breaker, notification_breaker)


def reset_breakers() -> None:
    for breaker in ALL_BREAKERS:
        breaker.close()


__all__ = [
    "inventory_breaker",
    "payment_breaker",
    "notification_breaker",
    "reset_breakers",
    "CircuitBreakerError",
]
