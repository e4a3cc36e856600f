import asyncio
import html
import logging
import math
import re
from typing import Any

import httpx

from app.application.interfaces.inventory_gateway import HotelListing, InventoryGateway
from app.domain.errors import InventoryUnavailableError
from app.infrastructure.circuit_breaker import CircuitBreakerError, inventory_breaker

PROVIDER = "liteapi"
_TAG_RE = re.compile(r"<[^>]+>")


class _RetryableUpstreamError(Exception):
    pass


def strip_markup(text: Any) -> str | None:
    """Plain text of an HTML fragment. Anything but a string yields None."""
    if not isinstance(text, str):
        return None
    return html.unescape(_TAG_RE.sub("", text)).strip()


def _text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def normalize_hotel(record: dict[str, Any]) -> HotelListing:
    """
    Map a LiteAPI hotel record to the service's listing shape.

    Fields of an unexpected type are dropped to None rather than failing the
    whole listing.
    """
    return HotelListing(
        id=_text(record.get("id")) or "",
        name=_text(record.get("name")) or "",
        description=strip_markup(record.get("hotelDescription")),
        address=_text(record.get("address")),
        city=_text(record.get("city")),
        stars=_number(record.get("stars")),
        rating=_number(record.get("rating")),
        image=_text(record.get("main_photo")) or _text(record.get("thumbnail")),
    )


class LiteApiInventoryGateway(InventoryGateway):
    """
    Read-only adapter over the LiteAPI hotel catalog.

    The upstream list endpoint ignores paging parameters, so the full result
    set for the configured city is fetched on every call and paginated
    locally. Being an idempotent read, the fetch is retried on transport
    errors and 5xx answers with exponential backoff.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.liteapi.travel/v3.0",
        country_code: str = "PH",
        city_name: str = "Manila",
        timeout_seconds: float = 10.0,
        retry_times: int = 2,
        retry_sleep_ms: int = 300,
    ) -> None:
        self._api_key = api_key or ""
        self._base_url = base_url.rstrip("/")
        self._country_code = country_code
        self._city_name = city_name
        self._timeout = timeout_seconds
        self._retry_times = retry_times
        self._retry_sleep_ms = retry_sleep_ms
        self._logger = logging.getLogger(__name__)

    async def fetch_hotels(self) -> list[HotelListing]:
        try:
            with inventory_breaker.calling():
                payload = await self._fetch_with_retry()
        except CircuitBreakerError as exc:
            self._logger.error(
                "Inventory circuit breaker is open - service unavailable",
                extra={"circuit_state": str(exc)},
            )
            raise InventoryUnavailableError(PROVIDER, "circuit breaker open") from exc

        records = payload.get("data") or []
        if not isinstance(records, list):
            raise InventoryUnavailableError(PROVIDER, "unexpected 'data' shape")
        try:
            return [normalize_hotel(record) for record in records if isinstance(record, dict)]
        except (TypeError, ValueError) as exc:
            self._logger.error("Inventory records could not be normalized", extra={"error": str(exc)})
            raise InventoryUnavailableError(PROVIDER, "unparsable hotel record") from exc

    async def _fetch_with_retry(self) -> dict[str, Any]:
        for attempt in range(self._retry_times + 1):
            try:
                return await self._fetch_once()
            except _RetryableUpstreamError as exc:
                if attempt == self._retry_times:
                    self._logger.error(
                        "Inventory fetch failed after retries",
                        extra={"attempts": attempt + 1, "error": str(exc)},
                    )
                    raise InventoryUnavailableError(PROVIDER, str(exc)) from exc
                delay = (self._retry_sleep_ms / 1000) * (2 ** attempt)
                self._logger.warning(
                    "Inventory fetch failed, retrying",
                    extra={"attempt": attempt + 1, "retry_delay": delay, "error": str(exc)},
                )
                await asyncio.sleep(delay)
        raise InventoryUnavailableError(PROVIDER, "no attempt made")

    async def _fetch_once(self) -> dict[str, Any]:
        url = f"{self._base_url}/data/hotels"
        params = {"countryCode": self._country_code, "cityName": self._city_name}
        headers = {"X-API-Key": self._api_key, "Accept": "application/json"}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as exc:
            raise _RetryableUpstreamError(f"timeout after {self._timeout}s") from exc
        except httpx.HTTPError as exc:
            raise _RetryableUpstreamError(f"transport error: {exc}") from exc

        if response.status_code >= 500:
            raise _RetryableUpstreamError(f"upstream answered {response.status_code}")
        if not response.is_success:
            raise InventoryUnavailableError(PROVIDER, f"upstream answered {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise InventoryUnavailableError(PROVIDER, "invalid JSON in response") from exc

        if not isinstance(payload, dict):
            raise InventoryUnavailableError(PROVIDER, "unexpected payload shape")
        return payload
