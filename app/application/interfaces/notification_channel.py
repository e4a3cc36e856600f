from abc import ABC, abstractmethod
from dataclasses import dataclass

CHANNEL_EMAIL = "email"
CHANNEL_SMS = "sms"


@dataclass
class NotificationMessage:
    subject: str
    body: str


@dataclass
class DeliveryReceipt:
    channel: str
    provider: str
    recipient: str
    provider_message_id: str | None = None


class NotificationChannel(ABC):
    channel: str = CHANNEL_EMAIL
    provider_name: str = "unknown"

    @abstractmethod
    async def send(self, recipient: str, message: NotificationMessage) -> DeliveryReceipt:
        """
        Deliver ``message`` to ``recipient``.

        Raises:
            DeliveryError: the provider rejected or never acknowledged the message.
        """
        pass
