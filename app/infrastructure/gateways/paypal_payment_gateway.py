import logging
from typing import Any

import httpx

from app.application.interfaces.payment_gateway import PaymentGateway, PaymentIntentResult
from app.domain.errors import AuthenticationError, ProviderResponseError
from app.domain.value_objects.money import Money
from app.infrastructure.circuit_breaker import CircuitBreakerError, payment_breaker

PROVIDER = "paypal"
APPROVE_REL = "approve"

logger = logging.getLogger(__name__)


async def fetch_access_token(
    client: httpx.AsyncClient,
    base_url: str,
    client_id: str,
    client_secret: str,
) -> str:
    """
    Client-credentials exchange against ``/v1/oauth2/token``.

    Raises:
        AuthenticationError: transport failure, non-2xx answer or no token.
    """
    try:
        response = await client.post(
            f"{base_url}/v1/oauth2/token",
            auth=(client_id, client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
        )
    except httpx.HTTPError as exc:
        raise AuthenticationError(PROVIDER, f"token request failed: {exc.__class__.__name__}") from exc

    try:
        data = response.json()
    except ValueError:
        data = {}

    token = data.get("access_token") if isinstance(data, dict) else None
    if not token:
        logger.error(
            "PayPal authentication failed",
            extra={"http_status": response.status_code, "error": data.get("error") if isinstance(data, dict) else None},
        )
        raise AuthenticationError(PROVIDER)
    return str(token)


def find_approve_link(order: dict[str, Any]) -> str | None:
    for link in order.get("links") or []:
        if isinstance(link, dict) and link.get("rel") == APPROVE_REL and link.get("href"):
            return link["href"]
    return None


class PayPalPaymentGateway(PaymentGateway):
    """
    PayPal Orders v2 adapter.

    A fresh OAuth token is requested for every intent. The order call is sent
    once with a ``PayPal-Request-Id`` derived from the booking id and is never
    retried here, so a flaky network cannot produce duplicate orders.
    """

    provider_name = PROVIDER

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        base_url: str = "https://api-m.sandbox.paypal.com",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._client_id = client_id or ""
        self._client_secret = client_secret or ""
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        if not (client_id and client_secret):
            logger.warning(
                "PayPal credentials missing",
                extra={
                    "paypal_client_id": "found" if client_id else "missing",
                    "paypal_client_secret": "found" if client_secret else "missing",
                },
            )

    async def create_payment_intent(
        self,
        booking_id: int,
        amount: Money,
        description: str,
        return_url: str,
        cancel_url: str,
        payer_email: str | None = None,
    ) -> PaymentIntentResult:
        """
        Create a CAPTURE order for ``amount`` and return its approve link.

        Raises:
            AuthenticationError: no access token could be obtained.
            ProviderResponseError: order rejected, unreadable, missing the
                approve link, or the circuit is open.
        """
        try:
            with payment_breaker.calling():
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    token = await fetch_access_token(
                        client, self._base_url, self._client_id, self._client_secret
                    )
                    order = await self._create_order(
                        client,
                        token=token,
                        booking_id=booking_id,
                        amount=amount,
                        description=description,
                        return_url=return_url,
                        cancel_url=cancel_url,
                        payer_email=payer_email,
                    )
        except CircuitBreakerError as exc:
            logger.error(
                "Payment circuit breaker is open - service unavailable",
                extra={"booking_id": booking_id, "circuit_state": str(exc)},
            )
            raise ProviderResponseError(PROVIDER, "circuit breaker open") from exc

        approve_url = find_approve_link(order)
        if not approve_url:
            logger.error(
                "PayPal order has no approve link",
                extra={"booking_id": booking_id, "order_id": order.get("id"), "order_status": order.get("status")},
            )
            raise ProviderResponseError(PROVIDER, "missing approve link in order response")

        logger.info(
            "PayPal order created",
            extra={"booking_id": booking_id, "order_id": order.get("id"), "amount": str(amount)},
        )
        return PaymentIntentResult(
            approve_url=approve_url,
            order_id=order.get("id"),
            status=order.get("status"),
        )

    async def _create_order(
        self,
        client: httpx.AsyncClient,
        token: str,
        booking_id: int,
        amount: Money,
        description: str,
        return_url: str,
        cancel_url: str,
        payer_email: str | None,
    ) -> dict[str, Any]:
        body = {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "reference_id": str(booking_id),
                    "custom_id": str(booking_id),
                    "description": description[:127],
                    "amount": {
                        "currency_code": amount.currency_code,
                        "value": amount.to_provider_value(),
                    },
                }
            ],
            "application_context": {
                "return_url": return_url,
                "cancel_url": cancel_url,
            },
        }
        if payer_email:
            body["payer"] = {"email_address": payer_email}
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "PayPal-Request-Id": f"booking-{booking_id}",
        }

        try:
            response = await client.post(
                f"{self._base_url}/v2/checkout/orders", json=body, headers=headers
            )
        except httpx.TimeoutException as exc:
            raise ProviderResponseError(PROVIDER, f"order request timed out after {self._timeout}s") from exc
        except httpx.HTTPError as exc:
            raise ProviderResponseError(PROVIDER, f"order request failed: {exc.__class__.__name__}") from exc

        try:
            order = response.json()
        except ValueError as exc:
            raise ProviderResponseError(PROVIDER, "invalid JSON in order response", response.status_code) from exc

        if not response.is_success:
            raise ProviderResponseError(
                PROVIDER,
                f"order creation answered {response.status_code}",
                response.status_code,
            )
        if not isinstance(order, dict):
            raise ProviderResponseError(PROVIDER, "unexpected order payload", response.status_code)
        return order

