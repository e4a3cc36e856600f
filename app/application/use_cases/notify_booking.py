import logging

from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.notification_channel import (
    CHANNEL_EMAIL,
    CHANNEL_SMS,
    DeliveryReceipt,
    NotificationMessage,
)
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.booking import Booking
from app.domain.errors import BookingNotFoundError, DeliveryError, ValidationError
from app.infrastructure.gateways.notifier_selector import NotifierSelector


def render_booking_message(booking: Booking) -> NotificationMessage:
    headline = "Booking confirmed!" if booking.is_confirmed else f"Booking {booking.status.value}"
    body = "\n".join(
        [
            headline,
            f"Hotel: {booking.hotel_name}",
            f"Check-in: {booking.checkin}",
            f"Check-out: {booking.checkout}",
            f"Guests: {booking.guests}",
            f"Total: {booking.total.display()}",
            f"Status: {booking.status.value}",
            f"Booking ID: {booking.id}",
        ]
    )
    return NotificationMessage(subject=f"{headline} - {booking.hotel_name}", body=body)


def select_recipient(
    booking: Booking,
    email: str | None,
    phone: str | None,
    sms_only: bool = False,
) -> tuple[str, str]:
    """
    Pick ``(channel, recipient)``: explicit email, explicit phone, then the
    contact stored on the booking in the same order.
    """
    if sms_only:
        recipient = phone or booking.payer_phone
        if not recipient:
            raise ValidationError("phone", "is required")
        return CHANNEL_SMS, recipient
    if email:
        return CHANNEL_EMAIL, email
    if phone:
        return CHANNEL_SMS, phone
    if booking.payer_email:
        return CHANNEL_EMAIL, booking.payer_email
    if booking.payer_phone:
        return CHANNEL_SMS, booking.payer_phone
    raise ValidationError("email", "an email or phone is required")


class NotifyBookingUseCase:
    """Sends the booking summary to the payer. Never changes booking state."""

    def __init__(
        self,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
        notifier_selector: NotifierSelector,
    ) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._notifier_selector = notifier_selector
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        booking_id: int,
        email: str | None = None,
        phone: str | None = None,
        sms_only: bool = False,
    ) -> DeliveryReceipt:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)

        channel_name, recipient = select_recipient(booking, email, phone, sms_only=sms_only)
        channel = self._notifier_selector.for_channel(channel_name)
        if channel is None:
            raise DeliveryError(channel_name, "none", "no channel configured")

        try:
            receipt = await channel.send(recipient, render_booking_message(booking))
        except DeliveryError as exc:
            self._logger.error(
                "Booking notification failed",
                extra={
                    "booking_id": booking_id,
                    "channel": channel_name,
                    "provider": exc.provider,
                    "error": exc.message,
                },
            )
            raise

        self._logger.info(
            "Booking notification sent",
            extra={
                "booking_id": booking_id,
                "channel": receipt.channel,
                "provider": receipt.provider,
                "provider_message_id": receipt.provider_message_id,
            },
        )
        return receipt
