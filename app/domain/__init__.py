"""
Domain layer - hotel booking service.

Pure business rules, no framework dependencies.

Layout:
- entities/: Booking aggregate and its state machine
- value_objects/: immutable values (Money)
- errors.py: domain exceptions with their HTTP mapping
- constants.py: status strings and defaults
"""

from app.domain.constants import (
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_FAILED,
    BOOKING_STATUS_PENDING,
)
from app.domain.entities import Booking, BookingStatus
from app.domain.errors import (
    AuthenticationError,
    BookingNotFoundError,
    DeliveryError,
    DomainError,
    InvalidBookingStatusError,
    InventoryUnavailableError,
    PaymentMismatchError,
    ProviderError,
    ProviderResponseError,
    StoreError,
    ValidationError,
    WebhookVerificationError,
)
from app.domain.value_objects import Money

__all__ = [
    # Constants
    "BOOKING_STATUS_PENDING",
    "BOOKING_STATUS_CONFIRMED",
    "BOOKING_STATUS_FAILED",
    # Entities
    "Booking",
    "BookingStatus",
    # Value Objects
    "Money",
    # Errors
    "DomainError",
    "ValidationError",
    "WebhookVerificationError",
    "BookingNotFoundError",
    "InvalidBookingStatusError",
    "PaymentMismatchError",
    "ProviderError",
    "AuthenticationError",
    "ProviderResponseError",
    "InventoryUnavailableError",
    "DeliveryError",
    "StoreError",
]
