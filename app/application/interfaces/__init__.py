"""Ports of the application layer."""

from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock, FakeClock, SystemClock
from app.application.interfaces.inventory_gateway import (
    HotelListing,
    HotelPage,
    InventoryGateway,
    paginate,
)
from app.application.interfaces.notification_channel import (
    CHANNEL_EMAIL,
    CHANNEL_SMS,
    DeliveryReceipt,
    NotificationChannel,
    NotificationMessage,
)
from app.application.interfaces.payment_gateway import PaymentGateway, PaymentIntentResult
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.webhook_verifier import WebhookVerifier

__all__ = [
    # Repositories
    "BookingRepo",
    # Gateways
    "InventoryGateway",
    "HotelListing",
    "HotelPage",
    "paginate",
    "PaymentGateway",
    "PaymentIntentResult",
    "NotificationChannel",
    "NotificationMessage",
    "DeliveryReceipt",
    "CHANNEL_EMAIL",
    "CHANNEL_SMS",
    "WebhookVerifier",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
