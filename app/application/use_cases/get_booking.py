from app.application.dtos.booking_dto import BookingSummaryDTO
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.errors import BookingNotFoundError


class GetBookingUseCase:
    def __init__(self, booking_repo: BookingRepo, transaction_manager: TransactionManager) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager

    async def execute(self, booking_id: int) -> BookingSummaryDTO:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return BookingSummaryDTO.from_entity(booking)

    async def ping(self) -> None:
        """Raise ``StoreError`` if the booking store cannot serve queries."""
        await self._booking_repo.ping()
