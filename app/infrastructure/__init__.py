"""
Infrastructure layer - hotel booking service.

Concrete implementations of the application ports.

Layout:
- db/: SQLAlchemy tables, engine, SQL repository and transaction manager
- gateways/: adapters for LiteAPI, PayPal, SendGrid, Resend and Twilio
- in_memory/: in-process twins used in dev mode and tests
- circuit_breaker.py: one pybreaker breaker per provider family
"""

# Database
from app.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager

# In-Memory (for testing)
from app.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryTransactionManager,
    StubInventoryGateway,
    StubPaymentGateway,
)

__all__ = [
    # Database
    "BookingRepoSQL",
    "SQLAlchemyTransactionManager",
    # In-Memory Implementations
    "InMemoryBookingRepo",
    "InMemoryTransactionManager",
    "StubInventoryGateway",
    "StubPaymentGateway",
]
