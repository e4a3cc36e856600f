import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from app.application.dtos.booking_dto import ConfirmationResultDTO
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.constants import MAX_BOOKING_ID
from app.domain.entities.booking import BookingStatus
from app.domain.errors import (
    BookingNotFoundError,
    InvalidBookingStatusError,
    PaymentMismatchError,
    ValidationError,
)


def _first_purchase_unit(resource: dict[str, Any]) -> dict[str, Any]:
    units = resource.get("purchase_units")
    if isinstance(units, list) and units and isinstance(units[0], dict):
        return units[0]
    return {}


def extract_booking_reference(payload: Any) -> tuple[int, Decimal | None]:
    """
    Pull ``(booking_id, amount)`` out of a confirmation payload.

    Accepts the plain ``{"bookingId": ..., "amount": ...}`` shape and PayPal
    event envelopes, where the id travels as ``custom_id`` on the resource
    (capture events) or on its first purchase unit (order events).
    """
    if not isinstance(payload, dict):
        raise ValidationError("payload", "must be a JSON object")

    resource = payload.get("resource")
    resource = resource if isinstance(resource, dict) else {}
    unit = _first_purchase_unit(resource)

    raw_id = payload.get("bookingId")
    if raw_id is None:
        raw_id = resource.get("custom_id") or unit.get("custom_id")
    if raw_id is None or str(raw_id).strip() == "":
        raise ValidationError("bookingId", "is required")
    try:
        booking_id = int(str(raw_id).strip())
    except ValueError as exc:
        raise ValidationError("bookingId", "must be an integer") from exc
    if not 1 <= booking_id <= MAX_BOOKING_ID:
        raise ValidationError("bookingId", "is out of range")

    raw_amount = payload.get("amount")
    if raw_amount is None:
        amount_obj = resource.get("amount") or unit.get("amount")
        if isinstance(amount_obj, dict):
            raw_amount = amount_obj.get("value")
    if raw_amount is None:
        return booking_id, None
    if isinstance(raw_amount, dict):
        raw_amount = raw_amount.get("value")
    try:
        amount = Decimal(str(raw_amount))
    except InvalidOperation as exc:
        raise ValidationError("amount", "is not a number") from exc
    if not amount.is_finite():
        raise ValidationError("amount", "is not a number")
    return booking_id, amount


class ConfirmBookingUseCase:
    """Applies the payment provider's approval signal to a booking."""

    def __init__(
        self,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
        clock: Clock | None = None,
    ) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._clock = clock or SystemClock()
        self._logger = logging.getLogger(__name__)

    async def execute(self, booking_id: int, amount: Decimal | None = None) -> ConfirmationResultDTO:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)

            if amount is not None and amount != booking.total.amount:
                raise PaymentMismatchError(
                    booking_id,
                    expected=booking.total.to_provider_value(),
                    received=str(amount),
                )

            if booking.is_confirmed:
                self._logger.info(
                    "Booking already confirmed, ignoring duplicate confirmation",
                    extra={"booking_id": booking_id},
                )
                return ConfirmationResultDTO(booking_id=booking_id, status=booking.status.value, changed=False)

            # raises InvalidBookingStatusError for failed bookings
            booking.confirm(self._clock.now())
            saved = await self._booking_repo.save_transition(booking, BookingStatus.PENDING)

        if not saved:
            return await self._resolve_lost_race(booking_id)

        self._logger.info(
            "Booking confirmed",
            extra={"booking_id": booking_id, "amount": str(booking.total)},
        )
        return ConfirmationResultDTO(booking_id=booking_id, status=BookingStatus.CONFIRMED.value)

    async def _resolve_lost_race(self, booking_id: int) -> ConfirmationResultDTO:
        # another writer moved the row first; answer from its current state
        async with self._transaction_manager.start():
            current = await self._booking_repo.get_by_id(booking_id)
        if current is not None and current.is_confirmed:
            return ConfirmationResultDTO(booking_id=booking_id, status=current.status.value, changed=False)
        current_status = current.status.value if current else "unknown"
        raise InvalidBookingStatusError(booking_id, current_status, BookingStatus.CONFIRMED.value)
