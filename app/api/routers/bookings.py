from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_use_cases
from app.api.schemas.bookings import (
    BookingIdPath,
    BookingSummaryResponse,
    CreateBookingRequest,
    CreateBookingResponse,
)
from app.application.dtos.booking_dto import CreateBookingDTO

router = APIRouter()


@router.post(
    "/bookings",
    response_model=CreateBookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: CreateBookingRequest,
    use_cases=Depends(get_use_cases),
) -> CreateBookingResponse:
    result = await use_cases["create_booking"].execute(
        CreateBookingDTO(
            hotel_name=payload.hotel_name,
            total=payload.total,
            checkin=payload.checkin,
            checkout=payload.checkout,
            guests=payload.guests,
            email=payload.email,
            phone=payload.phone,
        )
    )
    return CreateBookingResponse(booking_id=result.booking_id, approve_url=result.approve_url)


@router.get(
    "/bookings/{booking_id}",
    response_model=BookingSummaryResponse,
    status_code=status.HTTP_200_OK,
)
async def get_booking(
    booking_id: BookingIdPath,
    use_cases=Depends(get_use_cases),
) -> BookingSummaryResponse:
    summary = await use_cases["get_booking"].execute(booking_id=booking_id)
    return BookingSummaryResponse(
        id=summary.id,
        hotel_name=summary.hotel_name,
        checkin=summary.checkin,
        checkout=summary.checkout,
        guests=summary.guests,
        total=summary.total,
        currency=summary.currency,
        status=summary.status,
        created_at=summary.created_at,
        confirmed_at=summary.confirmed_at,
    )
