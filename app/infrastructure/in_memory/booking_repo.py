import asyncio
from copy import deepcopy
from datetime import datetime, timezone
from typing import Sequence

from app.application.interfaces.booking_repo import BookingRepo
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.errors import BookingNotFoundError


class InMemoryBookingRepo(BookingRepo):
    def __init__(self) -> None:
        self.bookings: dict[int, Booking] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def create_pending(self, booking: Booking) -> Booking:
        async with self._lock:
            now = booking.created_at or datetime.now(timezone.utc)
            booking.id = self._next_id
            self._next_id += 1
            booking.status = BookingStatus.PENDING
            booking.created_at = now
            booking.updated_at = now
            self.bookings[booking.id] = deepcopy(booking)
            return booking

    async def get_by_id(self, booking_id: int) -> Booking | None:
        stored = self.bookings.get(booking_id)
        # Callers mutate entities; never hand out the stored instance
        return deepcopy(stored) if stored else None

    async def set_payment_order(self, booking_id: int, payment_order_id: str) -> None:
        async with self._lock:
            if booking_id not in self.bookings:
                raise BookingNotFoundError(booking_id)
            self.bookings[booking_id].payment_order_id = payment_order_id

    async def save_transition(self, booking: Booking, expected_status: BookingStatus) -> bool:
        async with self._lock:
            stored = self.bookings.get(booking.id)
            if stored is None or stored.status != expected_status:
                return False
            stored.status = booking.status
            stored.failure_reason = booking.failure_reason
            stored.confirmed_at = booking.confirmed_at
            stored.updated_at = booking.updated_at
            return True

    async def list_pending_created_before(self, cutoff: datetime) -> Sequence[Booking]:
        return [
            deepcopy(booking)
            for booking in self.bookings.values()
            if booking.status == BookingStatus.PENDING and booking.created_at < cutoff
        ]

    async def ping(self) -> None:
        return None
