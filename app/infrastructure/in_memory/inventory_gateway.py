from app.application.interfaces.inventory_gateway import HotelListing, InventoryGateway


def sample_listings(count: int = 25) -> list[HotelListing]:
    return [
        HotelListing(
            id=f"lp{index:04d}",
            name=f"Sample Hotel {index}",
            description="Seaside rooms close to the city center.",
            address=f"{index} Roxas Boulevard",
            city="Manila",
            stars=4.0,
            rating=8.5,
            image=f"https://static.example.com/hotels/{index}.jpg",
        )
        for index in range(count)
    ]


class StubInventoryGateway(InventoryGateway):
    def __init__(self, listings: list[HotelListing] | None = None) -> None:
        self.listings = listings if listings is not None else sample_listings()
        self.calls = 0
        self.error: Exception | None = None

    async def fetch_hotels(self) -> list[HotelListing]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.listings)
