import hashlib
import hmac
import logging
from typing import Mapping

from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.webhook_verifier import WebhookVerifier
from app.domain.errors import WebhookVerificationError

SIGNATURE_HEADER = "x-webhook-signature"
TIMESTAMP_HEADER = "x-webhook-timestamp"
SIGNATURE_SCHEME = "sha256"

logger = logging.getLogger(__name__)


def sign_payload(secret: str, raw_body: bytes, timestamp: str | int | None = None) -> str:
    """
    Build the ``X-Webhook-Signature`` value for ``raw_body``.

    When a timestamp is sent it is part of the signed content
    (``"<timestamp>." + body``) so it cannot be replaced on replay.
    """
    signed = raw_body if timestamp is None else f"{timestamp}.".encode() + raw_body
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_SCHEME}={digest}"


class HmacWebhookVerifier(WebhookVerifier):
    """Shared-secret HMAC-SHA256 verification of the raw request body."""

    def __init__(
        self,
        secret: str | None,
        tolerance_seconds: int = 300,
        clock: Clock | None = None,
    ) -> None:
        self._secret = secret or ""
        self._tolerance = tolerance_seconds
        self._clock = clock or SystemClock()
        if not self._secret:
            logger.warning("WEBHOOK_SECRET not configured, every webhook will be rejected")

    async def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> None:
        if not self._secret:
            raise WebhookVerificationError("no webhook secret configured")

        lowered = {key.lower(): value for key, value in headers.items()}
        signature = lowered.get(SIGNATURE_HEADER)
        if not signature:
            raise WebhookVerificationError("missing signature header")

        scheme, _, received = signature.strip().partition("=")
        if scheme.lower() != SIGNATURE_SCHEME or not received:
            raise WebhookVerificationError("malformed signature header")

        timestamp = lowered.get(TIMESTAMP_HEADER)
        if timestamp is not None:
            self._check_timestamp(timestamp)

        expected = sign_payload(self._secret, raw_body, timestamp).partition("=")[2]
        if not hmac.compare_digest(expected, received.strip().lower()):
            raise WebhookVerificationError("signature mismatch")

    def _check_timestamp(self, timestamp: str) -> None:
        try:
            sent_at = int(timestamp)
        except ValueError as exc:
            raise WebhookVerificationError("malformed timestamp header") from exc

        skew = abs(self._clock.now().timestamp() - sent_at)
        if skew > self._tolerance:
            raise WebhookVerificationError("timestamp outside tolerance window")
