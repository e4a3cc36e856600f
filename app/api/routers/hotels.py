from fastapi import APIRouter, Depends, Query, status
from pydantic import ValidationError as PydanticValidationError

from app.api.dependencies import get_use_cases
from app.api.schemas.bookings import HotelListingSchema, HotelListResponse
from app.domain.errors import InventoryUnavailableError

router = APIRouter()


@router.get(
    "/hotels",
    response_model=HotelListResponse,
    status_code=status.HTTP_200_OK,
)
async def list_hotels(
    page: int = Query(default=1),
    limit: int = Query(default=10),
    use_cases=Depends(get_use_cases),
) -> HotelListResponse:
    result = await use_cases["list_hotels"].execute(page=page, limit=limit)
    try:
        data = [HotelListingSchema(**item.to_dict()) for item in result.items]
    except PydanticValidationError as exc:
        raise InventoryUnavailableError("inventory", "listing does not match the response shape") from exc
    return HotelListResponse(data=data, total=result.total)
