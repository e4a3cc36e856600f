import logging
from typing import Any

import httpx

from app.application.interfaces.notification_channel import NotificationChannel
from app.domain.errors import DeliveryError
from app.infrastructure.circuit_breaker import CircuitBreakerError, notification_breaker


class HttpNotificationChannel(NotificationChannel):
    """
    Shared transport for HTTP notification providers.

    Sends are never retried: a second attempt after an ambiguous timeout
    could deliver the message twice.
    """

    def __init__(self, timeout_seconds: float = 10.0) -> None:
        self._timeout = timeout_seconds
        self._logger = logging.getLogger(self.__class__.__module__)

    def _fail(self, message: str) -> DeliveryError:
        return DeliveryError(self.channel, self.provider_name, message)

    async def _post(self, url: str, **kwargs: Any) -> httpx.Response:
        try:
            with notification_breaker.calling():
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(url, **kwargs)
                if not response.is_success:
                    raise self._fail(f"provider answered {response.status_code}")
        except CircuitBreakerError as exc:
            self._logger.error(
                "Notification circuit breaker is open - service unavailable",
                extra={"provider": self.provider_name, "circuit_state": str(exc)},
            )
            raise self._fail("circuit breaker open") from exc
        except httpx.TimeoutException as exc:
            raise self._fail(f"timeout after {self._timeout}s") from exc
        except httpx.HTTPError as exc:
            raise self._fail(f"transport error: {exc.__class__.__name__}") from exc
        return response

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}
