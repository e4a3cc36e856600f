"""Booking entity - the only persistent aggregate of the service."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.domain.constants import (
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_FAILED,
    BOOKING_STATUS_PENDING,
    DATE_NOT_AVAILABLE,
    DEFAULT_CURRENCY,
    DEFAULT_GUESTS,
)
from app.domain.errors import InvalidBookingStatusError
from app.domain.value_objects.money import Money


class BookingStatus(str, Enum):
    """Lifecycle states of a booking."""

    PENDING = BOOKING_STATUS_PENDING
    CONFIRMED = BOOKING_STATUS_CONFIRMED
    FAILED = BOOKING_STATUS_FAILED


BOOKING_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.FAILED},
    BookingStatus.CONFIRMED: set(),
    BookingStatus.FAILED: set(),
}


def assert_booking_transition(
    booking_id: int | None, current: BookingStatus, target: BookingStatus
) -> None:
    if target not in BOOKING_TRANSITIONS.get(current, set()):
        raise InvalidBookingStatusError(booking_id, current.value, target.value)


@dataclass
class Booking:
    """
    A reservation attempt and its payment/confirmation status.

    Created once in ``pending``; moves to ``confirmed`` when the payment
    provider reports approval, or to ``failed`` when the payment step breaks
    or the booking expires unpaid.
    """

    hotel_name: str
    total_amount: Decimal
    currency_code: str = DEFAULT_CURRENCY
    checkin: str = DATE_NOT_AVAILABLE
    checkout: str = DATE_NOT_AVAILABLE
    guests: int = DEFAULT_GUESTS
    status: BookingStatus = BookingStatus.PENDING

    id: int | None = None
    payer_email: str | None = None
    payer_phone: str | None = None
    payment_order_id: str | None = None
    failure_reason: str | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None
    confirmed_at: datetime | None = None

    @property
    def total(self) -> Money:
        return Money(amount=self.total_amount, currency_code=self.currency_code)

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING

    def confirm(self, confirmed_at: datetime) -> bool:
        """
        Move the booking to ``confirmed``.

        Returns False when it already was confirmed (no-op), True when the
        transition happened.
        """
        if self.status == BookingStatus.CONFIRMED:
            return False
        assert_booking_transition(self.id, self.status, BookingStatus.CONFIRMED)
        self.status = BookingStatus.CONFIRMED
        self.confirmed_at = confirmed_at
        self.updated_at = confirmed_at
        return True

    def fail(self, reason: str, failed_at: datetime) -> None:
        assert_booking_transition(self.id, self.status, BookingStatus.FAILED)
        self.status = BookingStatus.FAILED
        self.failure_reason = reason
        self.updated_at = failed_at
