"""DTOs for bookings."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.entities.booking import Booking


@dataclass
class CreateBookingDTO:
    """Raw booking request. Values are validated by the use case, not here."""

    hotel_name: Any = None
    total: Any = None
    checkin: str | None = None
    checkout: str | None = None
    guests: Any = None
    email: str | None = None
    phone: str | None = None


@dataclass
class BookingIntentDTO:
    booking_id: int
    approve_url: str


@dataclass
class BookingSummaryDTO:
    """Read model returned to the success page and operators."""

    id: int
    hotel_name: str
    checkin: str
    checkout: str
    guests: int
    total: str
    currency: str
    status: str
    created_at: datetime | None = None
    confirmed_at: datetime | None = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSummaryDTO":
        return cls(
            id=booking.id,
            hotel_name=booking.hotel_name,
            checkin=booking.checkin,
            checkout=booking.checkout,
            guests=booking.guests,
            total=booking.total.to_provider_value(),
            currency=booking.currency_code,
            status=booking.status.value,
            created_at=booking.created_at,
            confirmed_at=booking.confirmed_at,
        )


@dataclass
class ConfirmationResultDTO:
    booking_id: int
    status: str
    # False when the booking was already confirmed
    changed: bool = True


@dataclass
class ExpiryReportDTO:
    booking_ids: list[int] = field(default_factory=list)

    @property
    def expired(self) -> int:
        return len(self.booking_ids)
