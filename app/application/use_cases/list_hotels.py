import logging

from app.application.interfaces.inventory_gateway import HotelPage, InventoryGateway
from app.domain.errors import ValidationError


class ListHotelsUseCase:
    def __init__(self, inventory_gateway: InventoryGateway) -> None:
        self._inventory_gateway = inventory_gateway
        self._logger = logging.getLogger(__name__)

    async def execute(self, page: int = 1, limit: int = 10) -> HotelPage:
        if page < 1:
            raise ValidationError("page", "must be >= 1")
        if limit < 1:
            raise ValidationError("limit", "must be >= 1")

        result = await self._inventory_gateway.list_hotels(page=page, limit=limit)
        self._logger.info(
            "Hotels listed",
            extra={"page": page, "limit": limit, "returned": len(result.items), "total": result.total},
        )
        return result
