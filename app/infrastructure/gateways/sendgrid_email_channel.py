from app.application.interfaces.notification_channel import (
    CHANNEL_EMAIL,
    DeliveryReceipt,
    NotificationMessage,
)
from app.infrastructure.gateways.http_notification_channel import HttpNotificationChannel

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class SendGridEmailChannel(HttpNotificationChannel):
    """SendGrid v3 mail send. A 202 answer means the message was queued."""

    channel = CHANNEL_EMAIL
    provider_name = "sendgrid"

    def __init__(self, api_key: str | None, sender: str, timeout_seconds: float = 10.0) -> None:
        super().__init__(timeout_seconds)
        self._api_key = api_key or ""
        self._sender = sender

    async def send(self, recipient: str, message: NotificationMessage) -> DeliveryReceipt:
        if not self._api_key:
            raise self._fail("SENDGRID_API_KEY not configured")

        response = await self._post(
            SENDGRID_SEND_URL,
            json={
                "personalizations": [{"to": [{"email": recipient}]}],
                "from": {"email": self._sender},
                "subject": message.subject,
                "content": [{"type": "text/plain", "value": message.body}],
            },
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
        )
        message_id = response.headers.get("X-Message-Id")
        self._logger.info(
            "Email queued",
            extra={"provider": self.provider_name, "provider_message_id": message_id},
        )
        return DeliveryReceipt(
            channel=self.channel,
            provider=self.provider_name,
            recipient=recipient,
            provider_message_id=message_id,
        )
