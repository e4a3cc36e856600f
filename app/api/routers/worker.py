from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_use_cases
from app.api.schemas.bookings import ExpireBookingsResponse
from app.infrastructure.db.retry import retry_on_deadlock

router = APIRouter()

# ten years
MAX_TTL_SECONDS = 10 * 365 * 24 * 3600


@router.post(
    "/workers/bookings/expire",
    response_model=ExpireBookingsResponse,
    status_code=status.HTTP_200_OK,
)
async def expire_pending_bookings(
    use_cases: Annotated[dict, Depends(get_use_cases)],
    ttl_seconds: int | None = Query(default=None, ge=0, le=MAX_TTL_SECONDS, alias="ttl-seconds"),
) -> ExpireBookingsResponse:
    """
    Fail pending bookings older than the TTL, with automatic deadlock retry.

    Meant to be called by an external scheduler (cron, Railway job).
    """

    async def execute_expire():
        return await use_cases["expire_bookings"].execute(ttl_seconds=ttl_seconds)

    report = await retry_on_deadlock(execute_expire, max_attempts=3, base_delay=0.1)
    return ExpireBookingsResponse(expired=report.expired, booking_ids=report.booking_ids)
