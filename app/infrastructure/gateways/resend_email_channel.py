from app.application.interfaces.notification_channel import (
    CHANNEL_EMAIL,
    DeliveryReceipt,
    NotificationMessage,
)
from app.infrastructure.gateways.http_notification_channel import HttpNotificationChannel

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailChannel(HttpNotificationChannel):
    channel = CHANNEL_EMAIL
    provider_name = "resend"

    def __init__(self, api_key: str | None, sender: str, timeout_seconds: float = 10.0) -> None:
        super().__init__(timeout_seconds)
        self._api_key = api_key or ""
        self._sender = sender

    async def send(self, recipient: str, message: NotificationMessage) -> DeliveryReceipt:
        if not self._api_key:
            raise self._fail("RESEND_API_KEY not configured")

        response = await self._post(
            RESEND_EMAILS_URL,
            json={
                "from": self._sender,
                "to": [recipient],
                "subject": message.subject,
                "text": message.body,
            },
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        message_id = self._json(response).get("id")
        if not message_id:
            raise self._fail("no message id in provider response")

        self._logger.info(
            "Email sent",
            extra={"provider": self.provider_name, "provider_message_id": message_id},
        )
        return DeliveryReceipt(
            channel=self.channel,
            provider=self.provider_name,
            recipient=recipient,
            provider_message_id=message_id,
        )
