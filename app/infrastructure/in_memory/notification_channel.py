import logging
from uuid import uuid4

from app.application.interfaces.notification_channel import (
    CHANNEL_EMAIL,
    DeliveryReceipt,
    NotificationChannel,
    NotificationMessage,
)


class LogNotificationChannel(NotificationChannel):
    """Writes the message to the application log instead of delivering it."""

    provider_name = "log"

    def __init__(self, channel: str = CHANNEL_EMAIL) -> None:
        self.channel = channel
        self._logger = logging.getLogger(__name__)

    async def send(self, recipient: str, message: NotificationMessage) -> DeliveryReceipt:
        self._logger.info(
            "Notification logged instead of sent",
            extra={"channel": self.channel, "subject": message.subject, "body": message.body},
        )
        return DeliveryReceipt(channel=self.channel, provider=self.provider_name, recipient=recipient)


class RecordingNotificationChannel(NotificationChannel):
    provider_name = "recording"

    def __init__(self, channel: str = CHANNEL_EMAIL) -> None:
        self.channel = channel
        self.sent: list[tuple[str, NotificationMessage]] = []
        self.error: Exception | None = None

    async def send(self, recipient: str, message: NotificationMessage) -> DeliveryReceipt:
        if self.error is not None:
            raise self.error
        self.sent.append((recipient, message))
        return DeliveryReceipt(
            channel=self.channel,
            provider=self.provider_name,
            recipient=recipient,
            provider_message_id=f"msg-{uuid4().hex[:10]}",
        )
