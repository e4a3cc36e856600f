from decimal import Decimal

import pytest

from app.application.use_cases.confirm_booking import ConfirmBookingUseCase, extract_booking_reference
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.errors import (
    BookingNotFoundError,
    InvalidBookingStatusError,
    PaymentMismatchError,
    ValidationError,
)
from app.infrastructure.in_memory.transaction_manager import NoopTransactionManager


@pytest.fixture
def use_case(booking_repo, clock):
    return ConfirmBookingUseCase(
        booking_repo=booking_repo,
        transaction_manager=NoopTransactionManager(),
        clock=clock,
    )


@pytest.fixture
async def pending_booking(booking_repo):
    return await booking_repo.create_pending(
        Booking(hotel_name="Manila Bay Suites", total_amount=Decimal("350.00"))
    )


async def test_confirms_pending_booking(use_case, booking_repo, pending_booking, clock):
    result = await use_case.execute(pending_booking.id)

    assert result.status == "confirmed"
    assert result.changed is True
    stored = await booking_repo.get_by_id(pending_booking.id)
    assert stored.status == BookingStatus.CONFIRMED
    assert stored.confirmed_at == clock.now()


async def test_confirming_twice_keeps_confirmed(use_case, booking_repo, pending_booking):
    await use_case.execute(pending_booking.id)
    result = await use_case.execute(pending_booking.id)

    assert result.status == "confirmed"
    assert result.changed is False
    stored = await booking_repo.get_by_id(pending_booking.id)
    assert stored.status == BookingStatus.CONFIRMED


async def test_unknown_booking_is_not_found_and_nothing_is_created(use_case, booking_repo):
    with pytest.raises(BookingNotFoundError):
        await use_case.execute(999)

    assert booking_repo.bookings == {}


async def test_matching_amount_is_accepted(use_case, pending_booking):
    result = await use_case.execute(pending_booking.id, amount=Decimal("350"))

    assert result.status == "confirmed"


async def test_amount_mismatch_is_rejected(use_case, booking_repo, pending_booking):
    with pytest.raises(PaymentMismatchError):
        await use_case.execute(pending_booking.id, amount=Decimal("1.00"))

    stored = await booking_repo.get_by_id(pending_booking.id)
    assert stored.status == BookingStatus.PENDING


async def test_failed_booking_cannot_be_confirmed(use_case, booking_repo, pending_booking, clock):
    pending_booking.fail("EXPIRED", clock.now())
    await booking_repo.save_transition(pending_booking, BookingStatus.PENDING)

    with pytest.raises(InvalidBookingStatusError):
        await use_case.execute(pending_booking.id)

    stored = await booking_repo.get_by_id(pending_booking.id)
    assert stored.status == BookingStatus.FAILED


async def test_lost_race_against_confirmation_is_success(use_case, booking_repo, pending_booking):
    async def always_loses(booking, expected_status):
        stored = booking_repo.bookings[booking.id]
        stored.status = BookingStatus.CONFIRMED
        return False

    booking_repo.save_transition = always_loses

    result = await use_case.execute(pending_booking.id)

    assert result.status == "confirmed"
    assert result.changed is False


class TestExtractBookingReference:
    def test_plain_payload(self):
        assert extract_booking_reference({"bookingId": "12"}) == (12, None)

    def test_plain_payload_with_amount(self):
        assert extract_booking_reference({"bookingId": 12, "amount": "350.00"}) == (12, Decimal("350.00"))

    def test_paypal_capture_event(self):
        payload = {
            "event_type": "PAYMENT.CAPTURE.COMPLETED",
            "resource": {
                "id": "5O190127TN364715T",
                "custom_id": "42",
                "amount": {"currency_code": "USD", "value": "350.00"},
            },
        }

        assert extract_booking_reference(payload) == (42, Decimal("350.00"))

    def test_paypal_order_event(self):
        payload = {
            "event_type": "CHECKOUT.ORDER.APPROVED",
            "resource": {
                "purchase_units": [
                    {"custom_id": "43", "amount": {"currency_code": "USD", "value": "99.00"}}
                ]
            },
        }

        assert extract_booking_reference(payload) == (43, Decimal("99.00"))

    @pytest.mark.parametrize("payload", [{}, {"bookingId": ""}, {"resource": {}}, []])
    def test_missing_id(self, payload):
        with pytest.raises(ValidationError):
            extract_booking_reference(payload)

    def test_non_numeric_id(self):
        with pytest.raises(ValidationError):
            extract_booking_reference({"bookingId": "abc"})

    @pytest.mark.parametrize("raw_id", [0, -3, str(10**30), 2**63])
    def test_out_of_range_id(self, raw_id):
        with pytest.raises(ValidationError):
            extract_booking_reference({"bookingId": raw_id})

    def test_non_numeric_amount(self):
        with pytest.raises(ValidationError):
            extract_booking_reference({"bookingId": 1, "amount": "lots"})
