"""DTOs of the application layer."""

from app.application.dtos.booking_dto import (
    BookingIntentDTO,
    BookingSummaryDTO,
    ConfirmationResultDTO,
    CreateBookingDTO,
    ExpiryReportDTO,
)

__all__ = [
    "CreateBookingDTO",
    "BookingIntentDTO",
    "BookingSummaryDTO",
    "ConfirmationResultDTO",
    "ExpiryReportDTO",
]
