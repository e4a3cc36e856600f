import json
import logging
from typing import Mapping

import httpx

from app.application.interfaces.webhook_verifier import WebhookVerifier
from app.domain.errors import ProviderResponseError, WebhookVerificationError
from app.infrastructure.circuit_breaker import CircuitBreakerError, payment_breaker
from app.infrastructure.gateways.paypal_payment_gateway import PROVIDER, fetch_access_token

# verify-webhook-signature field -> transmission header
TRANSMISSION_HEADERS = {
    "auth_algo": "paypal-auth-algo",
    "cert_url": "paypal-cert-url",
    "transmission_id": "paypal-transmission-id",
    "transmission_sig": "paypal-transmission-sig",
    "transmission_time": "paypal-transmission-time",
}

logger = logging.getLogger(__name__)


class PayPalWebhookVerifier(WebhookVerifier):
    """
    Delegates verification to PayPal's ``verify-webhook-signature`` API.

    A negative verdict is a ``WebhookVerificationError``. Failing to reach
    PayPal is a provider error instead, so the sender sees a 5xx and retries.
    """

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        webhook_id: str | None,
        base_url: str = "https://api-m.sandbox.paypal.com",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._client_id = client_id or ""
        self._client_secret = client_secret or ""
        self._webhook_id = webhook_id or ""
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> None:
        if not self._webhook_id:
            raise WebhookVerificationError("no PayPal webhook id configured")

        lowered = {key.lower(): value for key, value in headers.items()}
        fields = {}
        for field, header in TRANSMISSION_HEADERS.items():
            value = lowered.get(header)
            if not value:
                raise WebhookVerificationError(f"missing {header.upper()} header")
            fields[field] = value

        try:
            event = json.loads(raw_body)
        except ValueError as exc:
            raise WebhookVerificationError("body is not valid JSON") from exc

        body = {**fields, "webhook_id": self._webhook_id, "webhook_event": event}

        try:
            with payment_breaker.calling():
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    token = await fetch_access_token(
                        client, self._base_url, self._client_id, self._client_secret
                    )
                    response = await client.post(
                        f"{self._base_url}/v1/notifications/verify-webhook-signature",
                        json=body,
                        headers={
                            "Authorization": f"Bearer {token}",
                            "Content-Type": "application/json",
                        },
                    )
        except CircuitBreakerError as exc:
            raise ProviderResponseError(PROVIDER, "circuit breaker open") from exc
        except httpx.HTTPError as exc:
            raise ProviderResponseError(PROVIDER, f"verification request failed: {exc.__class__.__name__}") from exc

        try:
            verdict = response.json()
        except ValueError as exc:
            raise ProviderResponseError(PROVIDER, "invalid JSON in verification response", response.status_code) from exc

        status = verdict.get("verification_status") if isinstance(verdict, dict) else None
        if status != "SUCCESS":
            logger.warning(
                "PayPal webhook verification rejected",
                extra={
                    "transmission_id": fields["transmission_id"],
                    "verification_status": status,
                    "http_status": response.status_code,
                },
            )
            raise WebhookVerificationError(f"verification_status={status}")
