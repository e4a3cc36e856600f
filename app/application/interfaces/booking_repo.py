from datetime import datetime
from typing import Sequence

from app.domain.entities.booking import Booking, BookingStatus


class BookingRepo:
    async def create_pending(self, booking: Booking) -> Booking:
        """Insert a new ``pending`` booking and return it with its assigned id."""
        raise NotImplementedError

    async def get_by_id(self, booking_id: int) -> Booking | None:
        raise NotImplementedError

    async def set_payment_order(self, booking_id: int, payment_order_id: str) -> None:
        raise NotImplementedError

    async def save_transition(self, booking: Booking, expected_status: BookingStatus) -> bool:
        """
        Persist ``booking.status`` (and its timestamps / failure reason) only if
        the stored row is still in ``expected_status``.

        Returns False when another writer changed the row first.
        """
        raise NotImplementedError

    async def list_pending_created_before(self, cutoff: datetime) -> Sequence[Booking]:
        raise NotImplementedError

    async def ping(self) -> None:
        """Raise if the store cannot serve queries."""
        raise NotImplementedError
