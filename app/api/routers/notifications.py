from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_use_cases
from app.api.schemas.bookings import BookingIdPath, NotifyRequest, NotifyResponse, NotifySmsRequest
from app.application.interfaces.notification_channel import CHANNEL_EMAIL, DeliveryReceipt

router = APIRouter()


def _to_response(receipt: DeliveryReceipt) -> NotifyResponse:
    noun = "Email" if receipt.channel == CHANNEL_EMAIL else "SMS"
    return NotifyResponse(
        message=f"{noun} sent to {receipt.recipient}",
        channel=receipt.channel,
        provider_message_id=receipt.provider_message_id,
    )


@router.post(
    "/notify/{booking_id}",
    response_model=NotifyResponse,
    status_code=status.HTTP_200_OK,
)
async def notify_booking(
    booking_id: BookingIdPath,
    payload: NotifyRequest | None = None,
    use_cases=Depends(get_use_cases),
) -> NotifyResponse:
    payload = payload or NotifyRequest()
    receipt = await use_cases["notify_booking"].execute(
        booking_id=booking_id,
        email=payload.email,
        phone=payload.phone,
    )
    return _to_response(receipt)


@router.post(
    "/notify-sms/{booking_id}",
    response_model=NotifyResponse,
    status_code=status.HTTP_200_OK,
)
async def notify_booking_sms(
    booking_id: BookingIdPath,
    payload: NotifySmsRequest | None = None,
    use_cases=Depends(get_use_cases),
) -> NotifyResponse:
    """SMS-only variant of ``/notify``."""
    payload = payload or NotifySmsRequest()
    receipt = await use_cases["notify_booking"].execute(
        booking_id=booking_id,
        phone=payload.phone,
        sms_only=True,
    )
    return _to_response(receipt)
