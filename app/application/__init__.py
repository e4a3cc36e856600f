"""
Application layer of the booking service.

Holds the use cases, DTOs and the ports (interfaces) that infrastructure
adapters implement.

Layout:
- use_cases/: one class per operation
- dtos/: Data Transfer Objects
- interfaces/: ports for repositories, providers and utilities
"""

from app.application.dtos import (
    BookingIntentDTO,
    BookingSummaryDTO,
    ConfirmationResultDTO,
    CreateBookingDTO,
    ExpiryReportDTO,
)
from app.application.interfaces import (
    BookingRepo,
    Clock,
    DeliveryReceipt,
    FakeClock,
    HotelListing,
    HotelPage,
    InventoryGateway,
    NotificationChannel,
    NotificationMessage,
    PaymentGateway,
    PaymentIntentResult,
    SystemClock,
    TransactionManager,
    WebhookVerifier,
)

__all__ = [
    # DTOs
    "CreateBookingDTO",
    "BookingIntentDTO",
    "BookingSummaryDTO",
    "ConfirmationResultDTO",
    "ExpiryReportDTO",
    # Interfaces - Repositories
    "BookingRepo",
    # Interfaces - Gateways
    "InventoryGateway",
    "HotelListing",
    "HotelPage",
    "PaymentGateway",
    "PaymentIntentResult",
    "NotificationChannel",
    "NotificationMessage",
    "DeliveryReceipt",
    "WebhookVerifier",
    # Interfaces - Infrastructure
    "TransactionManager",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
