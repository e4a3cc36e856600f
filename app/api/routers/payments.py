import json
import logging

from fastapi import APIRouter, Depends, Request, status

from app.api.dependencies import ServiceContainer, get_container, get_use_cases
from app.api.schemas.bookings import WebhookAckResponse
from app.application.use_cases.confirm_booking import extract_booking_reference
from app.domain.errors import ValidationError
from app.infrastructure.db.retry import retry_on_deadlock

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/payments/webhook/paypal",
    response_model=WebhookAckResponse,
    status_code=status.HTTP_200_OK,
)
async def paypal_webhook(
    request: Request,
    container: ServiceContainer = Depends(get_container),
    use_cases=Depends(get_use_cases),
) -> WebhookAckResponse:
    """
    Payment confirmation callback.

    The signature is checked against the raw body before anything is parsed.
    The store write is retried on database deadlocks (up to 3 attempts).
    """
    raw_body = await request.body()
    await container.webhook_verifier.verify(raw_body, request.headers)

    try:
        payload = json.loads(raw_body or b"{}")
    except ValueError as exc:
        raise ValidationError("body", "is not valid JSON") from exc

    booking_id, amount = extract_booking_reference(payload)
    logger.info(
        "Payment confirmation received",
        extra={"booking_id": booking_id, "event_type": payload.get("event_type")},
    )

    async def execute_confirm():
        return await use_cases["confirm_booking"].execute(booking_id=booking_id, amount=amount)

    result = await retry_on_deadlock(execute_confirm, max_attempts=3, base_delay=0.1)
    return WebhookAckResponse(booking_id=result.booking_id, booking_status=result.status)
