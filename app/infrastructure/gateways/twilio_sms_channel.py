from app.application.interfaces.notification_channel import (
    CHANNEL_SMS,
    DeliveryReceipt,
    NotificationMessage,
)
from app.infrastructure.gateways.http_notification_channel import HttpNotificationChannel

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class TwilioSmsChannel(HttpNotificationChannel):
    """Twilio Programmable Messaging. Only the body is sent; SMS has no subject."""

    channel = CHANNEL_SMS
    provider_name = "twilio"

    def __init__(
        self,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str | None,
        timeout_seconds: float = 10.0,
    ) -> None:
        super().__init__(timeout_seconds)
        self._sid = account_sid or ""
        self._token = auth_token or ""
        self._from = from_number or ""

    async def send(self, recipient: str, message: NotificationMessage) -> DeliveryReceipt:
        if not (self._sid and self._token and self._from):
            raise self._fail("Twilio credentials not configured")

        response = await self._post(
            f"{TWILIO_API_BASE}/Accounts/{self._sid}/Messages.json",
            auth=(self._sid, self._token),
            data={"To": recipient, "From": self._from, "Body": message.body},
        )
        message_sid = self._json(response).get("sid")
        if not message_sid:
            raise self._fail("no message sid in provider response")

        self._logger.info(
            "SMS sent",
            extra={"provider": self.provider_name, "provider_message_id": message_sid},
        )
        return DeliveryReceipt(
            channel=self.channel,
            provider=self.provider_name,
            recipient=recipient,
            provider_message_id=message_sid,
        )
