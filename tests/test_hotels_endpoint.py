from unittest.mock import AsyncMock, patch

import httpx

from app.application.interfaces.inventory_gateway import HotelListing
from app.domain.errors import InventoryUnavailableError
from app.infrastructure.gateways.liteapi_inventory_gateway import LiteApiInventoryGateway


def test_list_hotels_default_page(client):
    response = client.get("/hotels")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 25
    assert len(body["data"]) == 10
    first = body["data"][0]
    assert set(first) == {"id", "name", "description", "address", "city", "stars", "rating", "image"}


def test_list_hotels_second_page(client):
    response = client.get("/hotels", params={"page": 2, "limit": 10})

    assert response.status_code == 200
    ids = [item["id"] for item in response.json()["data"]]
    assert ids == [f"lp{index:04d}" for index in range(10, 20)]


def test_invalid_paging(client):
    response = client.get("/hotels", params={"page": 0})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_non_numeric_paging(client):
    response = client.get("/hotels", params={"limit": "ten"})

    assert response.status_code == 400


def test_provider_failure_is_503(client, inventory_gateway):
    inventory_gateway.error = InventoryUnavailableError("liteapi", "upstream answered 502")

    response = client.get("/hotels")

    assert response.status_code == 503
    body = response.json()
    assert body["code"] == "INVENTORY_UNAVAILABLE"
    assert body["detail"] == "Hotel inventory is temporarily unavailable"
    assert "error_id" in body
    assert "502" not in body["detail"]


def test_upstream_record_with_bad_types(client, container):
    record = {"id": 7, "name": "Bay Inn", "hotelDescription": {"en": "<b>x</b>"}, "stars": "N/A"}
    container.inventory_gateway = LiteApiInventoryGateway(api_key="key", retry_sleep_ms=0)

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.get.return_value = httpx.Response(200, json={"data": [record]})
        mock_client_cls.return_value = mock_client

        response = client.get("/hotels")

    assert response.status_code == 200
    item = response.json()["data"][0]
    assert item["id"] == "7"
    assert item["description"] is None
    assert item["stars"] is None


def test_listing_that_does_not_fit_the_response_is_503(client, inventory_gateway):
    inventory_gateway.listings = [HotelListing(id="h1", name="Bay Inn", stars="N/A")]

    response = client.get("/hotels")

    assert response.status_code == 503
    assert response.json()["code"] == "INVENTORY_UNAVAILABLE"
