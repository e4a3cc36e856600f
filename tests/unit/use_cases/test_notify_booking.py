from decimal import Decimal

import pytest

from app.application.use_cases.notify_booking import (
    NotifyBookingUseCase,
    render_booking_message,
    select_recipient,
)
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.errors import BookingNotFoundError, DeliveryError, ValidationError
from app.infrastructure.in_memory.transaction_manager import NoopTransactionManager


@pytest.fixture
def use_case(booking_repo, notifier_selector):
    return NotifyBookingUseCase(
        booking_repo=booking_repo,
        transaction_manager=NoopTransactionManager(),
        notifier_selector=notifier_selector,
    )


@pytest.fixture
async def confirmed_booking(booking_repo, clock):
    booking = await booking_repo.create_pending(
        Booking(
            hotel_name="Manila Bay Suites",
            total_amount=Decimal("350.00"),
            checkin="2026-02-01",
            checkout="2026-02-05",
            guests=2,
            payer_email="stored@example.com",
            payer_phone="+15550001111",
        )
    )
    booking.confirm(clock.now())
    await booking_repo.save_transition(booking, BookingStatus.PENDING)
    return booking


def test_message_contains_booking_details():
    booking = Booking(
        id=5,
        hotel_name="Manila Bay Suites",
        total_amount=Decimal("350"),
        checkin="2026-02-01",
        checkout="2026-02-05",
        guests=2,
        status=BookingStatus.CONFIRMED,
    )

    message = render_booking_message(booking)

    assert message.body.splitlines() == [
        "Booking confirmed!",
        "Hotel: Manila Bay Suites",
        "Check-in: 2026-02-01",
        "Check-out: 2026-02-05",
        "Guests: 2",
        "Total: $350.00",
        "Status: confirmed",
        "Booking ID: 5",
    ]


def test_message_headline_for_pending_booking():
    booking = Booking(id=5, hotel_name="H", total_amount=Decimal("10"), currency_code="PHP")

    message = render_booking_message(booking)

    assert message.body.startswith("Booking pending\n")
    assert "Total: 10.00 PHP" in message.body


def test_recipient_precedence():
    booking = Booking(hotel_name="H", total_amount=Decimal("1"), payer_email="a@x.com", payer_phone="+1")

    assert select_recipient(booking, "b@x.com", "+2") == ("email", "b@x.com")
    assert select_recipient(booking, None, "+2") == ("sms", "+2")
    assert select_recipient(booking, None, None) == ("email", "a@x.com")
    booking.payer_email = None
    assert select_recipient(booking, None, None) == ("sms", "+1")


def test_no_contact_is_a_validation_error():
    booking = Booking(hotel_name="H", total_amount=Decimal("1"))

    with pytest.raises(ValidationError):
        select_recipient(booking, None, None)


def test_sms_only_ignores_email():
    booking = Booking(hotel_name="H", total_amount=Decimal("1"), payer_email="a@x.com")

    assert select_recipient(booking, "b@x.com", "+2", sms_only=True) == ("sms", "+2")
    with pytest.raises(ValidationError):
        select_recipient(booking, "b@x.com", None, sms_only=True)


async def test_sends_email_to_explicit_address(use_case, confirmed_booking, email_channel, sms_channel):
    receipt = await use_case.execute(confirmed_booking.id, email="jane@example.com")

    assert receipt.channel == "email"
    assert receipt.recipient == "jane@example.com"
    recipient, message = email_channel.sent[0]
    assert recipient == "jane@example.com"
    assert "Hotel: Manila Bay Suites" in message.body
    assert sms_channel.sent == []


async def test_falls_back_to_stored_email(use_case, confirmed_booking, email_channel):
    receipt = await use_case.execute(confirmed_booking.id)

    assert receipt.recipient == "stored@example.com"


async def test_sms_channel_for_phone(use_case, confirmed_booking, sms_channel):
    receipt = await use_case.execute(confirmed_booking.id, phone="+15552223333")

    assert receipt.channel == "sms"
    assert sms_channel.sent[0][0] == "+15552223333"


async def test_unknown_booking(use_case):
    with pytest.raises(BookingNotFoundError):
        await use_case.execute(404, email="jane@example.com")


async def test_delivery_failure_leaves_status_untouched(use_case, booking_repo, confirmed_booking, email_channel):
    email_channel.error = DeliveryError("email", "sendgrid", "provider answered 500")

    with pytest.raises(DeliveryError):
        await use_case.execute(confirmed_booking.id, email="jane@example.com")

    stored = await booking_repo.get_by_id(confirmed_booking.id)
    assert stored.status == BookingStatus.CONFIRMED
