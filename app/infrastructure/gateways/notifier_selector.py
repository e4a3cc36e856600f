from app.application.interfaces.notification_channel import (
    CHANNEL_EMAIL,
    CHANNEL_SMS,
    NotificationChannel,
)
from app.config import Settings
from app.infrastructure.gateways.resend_email_channel import ResendEmailChannel
from app.infrastructure.gateways.sendgrid_email_channel import SendGridEmailChannel
from app.infrastructure.gateways.twilio_sms_channel import TwilioSmsChannel
from app.infrastructure.in_memory.notification_channel import LogNotificationChannel


class NotifierSelector:
    """Holds one configured channel per kind of contact (email, sms)."""

    def __init__(self, channels: dict[str, NotificationChannel] | None = None):
        self._channels = dict(channels or {})

    def register(self, channel: NotificationChannel) -> None:
        self._channels[channel.channel] = channel

    def for_channel(self, channel: str) -> NotificationChannel | None:
        return self._channels.get(channel)


def build_email_channel(settings: Settings) -> NotificationChannel:
    if settings.email_provider == "sendgrid":
        return SendGridEmailChannel(
            api_key=settings.sendgrid_api_key,
            sender=settings.email_from,
            timeout_seconds=settings.notification_timeout_seconds,
        )
    if settings.email_provider == "resend":
        return ResendEmailChannel(
            api_key=settings.resend_api_key,
            sender=settings.email_from,
            timeout_seconds=settings.notification_timeout_seconds,
        )
    return LogNotificationChannel(CHANNEL_EMAIL)


def build_sms_channel(settings: Settings) -> NotificationChannel:
    if settings.sms_provider == "twilio":
        return TwilioSmsChannel(
            account_sid=settings.twilio_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_phone_number,
            timeout_seconds=settings.notification_timeout_seconds,
        )
    return LogNotificationChannel(CHANNEL_SMS)


def build_notifier_selector(settings: Settings) -> NotifierSelector:
    selector = NotifierSelector()
    selector.register(build_email_channel(settings))
    selector.register(build_sms_channel(settings))
    return selector
