"""Entities of the booking domain."""

from app.domain.entities.booking import (
    BOOKING_TRANSITIONS,
    Booking,
    BookingStatus,
    assert_booking_transition,
)

__all__ = [
    "Booking",
    "BookingStatus",
    "BOOKING_TRANSITIONS",
    "assert_booking_transition",
]
