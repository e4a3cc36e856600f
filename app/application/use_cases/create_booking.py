import logging
from typing import Any
from urllib.parse import urlencode

from app.application.dtos.booking_dto import BookingIntentDTO, CreateBookingDTO
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.payment_gateway import PaymentGateway
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.constants import (
    DATE_NOT_AVAILABLE,
    DEFAULT_CURRENCY,
    DEFAULT_GUESTS,
    FAILURE_REASON_PAYMENT_PROVIDER,
)
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.errors import DomainError, ValidationError
from app.domain.value_objects.money import Money


def parse_guests(raw: Any) -> int:
    """Absent or zero means one guest; anything but a positive integer is rejected."""
    if raw is None or raw == "":
        return DEFAULT_GUESTS
    if isinstance(raw, bool):
        raise ValidationError("guests", "must be an integer")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValidationError("guests", "must be an integer")
        raw = int(raw)
    try:
        guests = int(str(raw).strip())
    except ValueError as exc:
        raise ValidationError("guests", "must be an integer") from exc
    if guests < 0:
        raise ValidationError("guests", "cannot be negative")
    return guests or DEFAULT_GUESTS


def _blank_to_default(value: str | None) -> str:
    if value is None or not str(value).strip():
        return DATE_NOT_AVAILABLE
    return str(value).strip()


class CreateBookingUseCase:
    """
    Creates a pending booking and opens a payment order for it.

    The pending row is committed before the payment provider is called, so
    the id can travel in the redirect URLs and a provider failure always
    leaves a row behind to mark ``failed``.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        payment_gateway: PaymentGateway,
        transaction_manager: TransactionManager,
        public_base_url: str,
        currency_code: str = DEFAULT_CURRENCY,
        clock: Clock | None = None,
    ) -> None:
        self._booking_repo = booking_repo
        self._payment_gateway = payment_gateway
        self._transaction_manager = transaction_manager
        self._public_base_url = public_base_url.rstrip("/")
        self._currency_code = currency_code
        self._clock = clock or SystemClock()
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: CreateBookingDTO) -> BookingIntentDTO:
        booking = self._build_booking(request)

        async with self._transaction_manager.start():
            booking = await self._booking_repo.create_pending(booking)

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": booking.id,
                "hotel_name": booking.hotel_name,
                "amount": str(booking.total),
            },
        )

        try:
            intent = await self._payment_gateway.create_payment_intent(
                booking_id=booking.id,
                amount=booking.total,
                description=booking.hotel_name,
                return_url=self._success_url(booking),
                cancel_url=self._cancel_url(booking),
                payer_email=booking.payer_email,
            )
        except Exception as exc:
            await self._compensate(booking, exc)
            raise

        if intent.order_id:
            async with self._transaction_manager.start():
                await self._booking_repo.set_payment_order(booking.id, intent.order_id)

        self._logger.info(
            "Payment order created for booking",
            extra={
                "booking_id": booking.id,
                "payment_provider": self._payment_gateway.provider_name,
                "payment_order_id": intent.order_id,
            },
        )
        return BookingIntentDTO(booking_id=booking.id, approve_url=intent.approve_url)

    def _build_booking(self, request: CreateBookingDTO) -> Booking:
        hotel_name = request.hotel_name
        if not isinstance(hotel_name, str) or not hotel_name.strip():
            raise ValidationError("hotelName", "is required")

        try:
            total = Money.parse(request.total, self._currency_code)
        except ValueError as exc:
            raise ValidationError("total", str(exc)) from exc
        if total.is_zero():
            raise ValidationError("total", "must be greater than zero")

        now = self._clock.now()
        return Booking(
            hotel_name=hotel_name.strip(),
            total_amount=total.amount,
            currency_code=total.currency_code,
            checkin=_blank_to_default(request.checkin),
            checkout=_blank_to_default(request.checkout),
            guests=parse_guests(request.guests),
            payer_email=request.email or None,
            payer_phone=request.phone or None,
            created_at=now,
            updated_at=now,
        )

    def _success_url(self, booking: Booking) -> str:
        params = {"bookingId": str(booking.id)}
        if booking.payer_email:
            params["email"] = booking.payer_email
        return f"{self._public_base_url}/success.html?{urlencode(params)}"

    def _cancel_url(self, booking: Booking) -> str:
        return f"{self._public_base_url}/cancel.html?{urlencode({'bookingId': booking.id})}"

    async def _compensate(self, booking: Booking, cause: Exception) -> None:
        self._logger.error(
            "Payment step failed, marking booking as failed",
            extra={
                "booking_id": booking.id,
                "error_code": getattr(cause, "code", cause.__class__.__name__),
                "error": str(cause),
            },
        )
        booking.fail(FAILURE_REASON_PAYMENT_PROVIDER, self._clock.now())
        try:
            async with self._transaction_manager.start():
                saved = await self._booking_repo.save_transition(booking, BookingStatus.PENDING)
        except DomainError as exc:
            # the provider error is what the caller needs to see
            self._logger.error(
                "Could not mark booking as failed",
                extra={"booking_id": booking.id, "error": exc.message},
            )
            return
        if not saved:
            self._logger.warning(
                "Booking left pending state before compensation",
                extra={"booking_id": booking.id},
            )
