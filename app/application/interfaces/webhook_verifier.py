from abc import ABC, abstractmethod
from typing import Mapping


class WebhookVerifier(ABC):
    """Authenticates an inbound payment-provider callback before it is trusted."""

    @abstractmethod
    async def verify(self, raw_body: bytes, headers: Mapping[str, str]) -> None:
        """
        Raises:
            WebhookVerificationError: signature missing, stale or invalid.
        """
        pass
