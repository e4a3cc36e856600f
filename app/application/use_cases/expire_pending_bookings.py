import logging
from datetime import timedelta

from app.application.dtos.booking_dto import ExpiryReportDTO
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.constants import FAILURE_REASON_EXPIRED
from app.domain.entities.booking import BookingStatus


class ExpirePendingBookingsUseCase:
    """
    Marks ``pending`` bookings older than the TTL as ``failed``.

    Each row is moved with a conditional update, so a booking confirmed
    between the scan and the write is left alone.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
        ttl_seconds: int = 3600,
        clock: Clock | None = None,
    ) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._ttl_seconds = ttl_seconds
        self._clock = clock or SystemClock()
        self._logger = logging.getLogger(__name__)

    async def execute(self, ttl_seconds: int | None = None) -> ExpiryReportDTO:
        ttl = self._ttl_seconds if ttl_seconds is None else ttl_seconds
        now = self._clock.now()
        cutoff = now - timedelta(seconds=ttl)
        report = ExpiryReportDTO()

        async with self._transaction_manager.start():
            stale = await self._booking_repo.list_pending_created_before(cutoff)
            for booking in stale:
                booking.fail(FAILURE_REASON_EXPIRED, now)
                if await self._booking_repo.save_transition(booking, BookingStatus.PENDING):
                    report.booking_ids.append(booking.id)

        if report.booking_ids:
            self._logger.info(
                "Expired stale pending bookings",
                extra={"expired": report.expired, "booking_ids": report.booking_ids, "ttl_seconds": ttl},
            )
        return report
