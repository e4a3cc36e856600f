"""In-memory implementations for dev mode and testing."""

from app.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from app.infrastructure.in_memory.inventory_gateway import StubInventoryGateway
from app.infrastructure.in_memory.notification_channel import (
    LogNotificationChannel,
    RecordingNotificationChannel,
)
from app.infrastructure.in_memory.payment_gateway import StubPaymentGateway
from app.infrastructure.in_memory.transaction_manager import NoopTransactionManager as InMemoryTransactionManager

__all__ = [
    # Repositories
    "InMemoryBookingRepo",
    # Gateways
    "StubInventoryGateway",
    "StubPaymentGateway",
    "LogNotificationChannel",
    "RecordingNotificationChannel",
    # Infrastructure
    "InMemoryTransactionManager",
]
