"""
Pytest configuration and shared fixtures.

Provides reusable fixtures for:
- An in-memory ServiceContainer wired with stub providers
- HTTP test client (FastAPI TestClient) around create_app()
- Signed webhook requests
- Circuit breaker reset between tests
"""

import json
from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import ServiceContainer
from app.application.interfaces.clock import FakeClock
from app.config import Settings
from app.infrastructure.circuit_breaker import reset_breakers
from app.infrastructure.gateways.hmac_webhook_verifier import HmacWebhookVerifier, sign_payload
from app.infrastructure.gateways.notifier_selector import NotifierSelector
from app.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from app.infrastructure.in_memory.inventory_gateway import StubInventoryGateway
from app.infrastructure.in_memory.notification_channel import RecordingNotificationChannel
from app.infrastructure.in_memory.payment_gateway import StubPaymentGateway
from app.main import create_app

WEBHOOK_SECRET = "test-webhook-secret"
PUBLIC_BASE_URL = "https://booking.example.com"
NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# SERVICES
# ============================================================================

@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        use_in_memory=True,
        public_base_url=PUBLIC_BASE_URL,
        webhook_secret=WEBHOOK_SECRET,
        payment_currency="USD",
        pending_booking_ttl_seconds=3600,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def booking_repo() -> InMemoryBookingRepo:
    return InMemoryBookingRepo()


@pytest.fixture
def inventory_gateway() -> StubInventoryGateway:
    return StubInventoryGateway()


@pytest.fixture
def payment_gateway() -> StubPaymentGateway:
    return StubPaymentGateway()


@pytest.fixture
def email_channel() -> RecordingNotificationChannel:
    return RecordingNotificationChannel("email")


@pytest.fixture
def sms_channel() -> RecordingNotificationChannel:
    return RecordingNotificationChannel("sms")


@pytest.fixture
def notifier_selector(email_channel, sms_channel) -> NotifierSelector:
    return NotifierSelector({"email": email_channel, "sms": sms_channel})


@pytest.fixture
def container(
    settings,
    clock,
    booking_repo,
    inventory_gateway,
    payment_gateway,
    notifier_selector,
) -> ServiceContainer:
    return ServiceContainer(
        settings=settings,
        inventory_gateway=inventory_gateway,
        payment_gateway=payment_gateway,
        webhook_verifier=HmacWebhookVerifier(secret=WEBHOOK_SECRET, clock=clock),
        notifier_selector=notifier_selector,
        clock=clock,
        booking_repo=booking_repo,
    )


# ============================================================================
# HTTP CLIENT
# ============================================================================

@pytest.fixture
def client(settings, container) -> Generator[TestClient, None, None]:
    app = create_app(settings=settings, container=container)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def post_webhook(client):
    """POST a JSON payload to the PayPal webhook with a valid signature."""

    def _post(payload, secret: str = WEBHOOK_SECRET):
        body = json.dumps(payload).encode()
        return client.post(
            "/payments/webhook/paypal",
            content=body,
            headers={
                "Content-Type": "application/json",
                "X-Webhook-Signature": sign_payload(secret, body),
            },
        )

    return _post


@pytest.fixture
def booking_payload():
    return {
        "hotelName": "Manila Bay Suites",
        "total": "350.00",
        "checkin": "2026-02-01",
        "checkout": "2026-02-05",
        "guests": 2,
        "email": "jane@example.com",
    }


# ============================================================================
# HOOKS
# ============================================================================

@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """
    Reset circuit breakers before each test.
    Keeps a breaker opened by one test from failing the next.
    """
    reset_breakers()
    yield
    reset_breakers()
