from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any, Sequence


@dataclass
class HotelListing:
    id: str
    name: str
    description: str | None = None
    address: str | None = None
    city: str | None = None
    stars: float | None = None
    rating: float | None = None
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class HotelPage:
    items: list[HotelListing] = field(default_factory=list)
    total: int = 0


def paginate(listings: Sequence[HotelListing], page: int, limit: int) -> HotelPage:
    """Slice ``[(page-1)*limit, page*limit)``; ``total`` is the unsliced size."""
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be >= 1")
    start = (page - 1) * limit
    return HotelPage(items=list(listings[start:start + limit]), total=len(listings))


class InventoryGateway(ABC):
    @abstractmethod
    async def fetch_hotels(self) -> list[HotelListing]:
        """
        Fetch and normalize the full upstream catalog.

        Raises:
            InventoryUnavailableError: on any transport or parse failure.
        """
        pass

    async def list_hotels(self, page: int, limit: int) -> HotelPage:
        return paginate(await self.fetch_hotels(), page=page, limit=limit)
