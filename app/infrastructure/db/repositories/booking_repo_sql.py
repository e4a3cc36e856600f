from datetime import datetime, timezone
from functools import wraps
from typing import Sequence

from sqlalchemy import insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.booking_repo import BookingRepo
from app.domain.constants import MAX_BOOKING_ID
from app.domain.entities.booking import Booking, BookingStatus
from app.domain.errors import StoreError
from app.infrastructure.db.tables import bookings


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        # SQLite drops tzinfo; everything is written in UTC
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _store_errors(operation: str):
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as exc:
                raise StoreError(operation, exc.__class__.__name__) from exc
        return wrapper
    return decorator


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @_store_errors("create_pending")
    async def create_pending(self, booking: Booking) -> Booking:
        created_at = _as_utc(booking.created_at) or datetime.now(timezone.utc)
        stmt = insert(bookings).values(
            hotel_name=booking.hotel_name,
            checkin=booking.checkin,
            checkout=booking.checkout,
            guests=booking.guests,
            total_amount=booking.total_amount,
            currency_code=booking.currency_code,
            status=BookingStatus.PENDING.value,
            payer_email=booking.payer_email,
            payer_phone=booking.payer_phone,
            created_at=created_at,
            updated_at=created_at,
        )
        result = await self._session.execute(stmt)
        booking.id = result.inserted_primary_key[0]
        booking.status = BookingStatus.PENDING
        booking.created_at = created_at
        booking.updated_at = created_at
        return booking

    @_store_errors("get_by_id")
    async def get_by_id(self, booking_id: int) -> Booking | None:
        if not 1 <= booking_id <= MAX_BOOKING_ID:
            # the INTEGER column cannot hold it, so no row can match
            return None
        stmt = select(bookings).where(bookings.c.id == booking_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return self._map_booking(row) if row else None

    @_store_errors("set_payment_order")
    async def set_payment_order(self, booking_id: int, payment_order_id: str) -> None:
        stmt = (
            update(bookings)
            .where(bookings.c.id == booking_id)
            .values(payment_order_id=payment_order_id)
        )
        await self._session.execute(stmt)

    @_store_errors("save_transition")
    async def save_transition(self, booking: Booking, expected_status: BookingStatus) -> bool:
        stmt = (
            update(bookings)
            .where(
                bookings.c.id == booking.id,
                bookings.c.status == expected_status.value,
            )
            .values(
                status=booking.status.value,
                failure_reason=booking.failure_reason,
                confirmed_at=_as_utc(booking.confirmed_at),
                updated_at=_as_utc(booking.updated_at) or datetime.now(timezone.utc),
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    @_store_errors("list_pending_created_before")
    async def list_pending_created_before(self, cutoff: datetime) -> Sequence[Booking]:
        stmt = (
            select(bookings)
            .where(
                bookings.c.status == BookingStatus.PENDING.value,
                bookings.c.created_at < _as_utc(cutoff),
            )
            .order_by(bookings.c.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_booking(row) for row in result.mappings().all()]

    @_store_errors("ping")
    async def ping(self) -> None:
        result = await self._session.execute(text("SELECT 1"))
        result.scalar()

    def _map_booking(self, row) -> Booking:
        return Booking(
            id=row["id"],
            hotel_name=row["hotel_name"],
            checkin=row["checkin"],
            checkout=row["checkout"],
            guests=row["guests"],
            total_amount=row["total_amount"],
            currency_code=row["currency_code"],
            status=BookingStatus(row["status"]),
            payer_email=row.get("payer_email"),
            payer_phone=row.get("payer_phone"),
            payment_order_id=row.get("payment_order_id"),
            failure_reason=row.get("failure_reason"),
            created_at=_as_utc(row["created_at"]),
            updated_at=_as_utc(row["updated_at"]),
            confirmed_at=_as_utc(row.get("confirmed_at")),
        )
