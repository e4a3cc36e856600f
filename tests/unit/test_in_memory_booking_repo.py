from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.entities.booking import Booking, BookingStatus
from app.domain.errors import BookingNotFoundError
from app.infrastructure.in_memory.booking_repo import InMemoryBookingRepo

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def _booking() -> Booking:
    return Booking(hotel_name="Manila Bay Suites", total_amount=Decimal("350.00"), created_at=NOW)


async def test_set_payment_order_on_unknown_booking():
    repo = InMemoryBookingRepo()

    with pytest.raises(BookingNotFoundError):
        await repo.set_payment_order(99, "ORDER-1")


async def test_set_payment_order():
    repo = InMemoryBookingRepo()
    booking = await repo.create_pending(_booking())

    await repo.set_payment_order(booking.id, "ORDER-1")

    assert (await repo.get_by_id(booking.id)).payment_order_id == "ORDER-1"


async def test_save_transition_is_conditional():
    repo = InMemoryBookingRepo()
    booking = await repo.create_pending(_booking())
    booking.confirm(NOW + timedelta(minutes=5))

    assert await repo.save_transition(booking, BookingStatus.PENDING) is True
    assert await repo.save_transition(booking, BookingStatus.PENDING) is False
    assert repo.bookings[booking.id].status == BookingStatus.CONFIRMED
