from datetime import datetime
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictFloat, StrictInt, StrictStr

from app.domain.constants import MAX_BOOKING_ID

# Amounts and guest counts are accepted loosely and validated by the use
# case, so malformed values answer with the domain's own error code.
# Strict members keep JSON booleans from being read as 1.
LooseNumber = StrictInt | StrictFloat | StrictStr

BookingIdPath = Annotated[int, Path(ge=1, le=MAX_BOOKING_ID)]


class HotelListingSchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    address: str | None = None
    city: str | None = None
    stars: float | None = None
    rating: float | None = None
    image: str | None = None


class HotelListResponse(BaseModel):
    data: list[HotelListingSchema]
    total: int


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hotel_name: str | None = Field(default=None, alias="hotelName")
    total: LooseNumber | None = None
    checkin: str | None = None
    checkout: str | None = None
    guests: LooseNumber | None = None
    email: EmailStr | None = None
    phone: str | None = None


class CreateBookingResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: int = Field(alias="bookingId")
    approve_url: str = Field(alias="approveUrl")


class BookingSummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    hotel_name: str = Field(alias="hotelName")
    checkin: str
    checkout: str
    guests: int
    total: str
    currency: str
    status: str
    created_at: datetime | None = Field(default=None, alias="createdAt")
    confirmed_at: datetime | None = Field(default=None, alias="confirmedAt")


class WebhookAckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    booking_id: int = Field(alias="bookingId")
    booking_status: str = Field(alias="bookingStatus")


class NotifyRequest(BaseModel):
    email: EmailStr | None = None
    phone: str | None = None


class NotifySmsRequest(BaseModel):
    phone: str | None = None


class NotifyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    channel: str
    provider_message_id: str | None = Field(default=None, alias="providerMessageId")


class ExpireBookingsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    expired: int
    booking_ids: list[int] = Field(default_factory=list, alias="bookingIds")
