from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    database_url: str = "sqlite+aiosqlite:///./booking.db"
    use_in_memory: bool = False
    log_level: str = "INFO"
    port: int = 8080

    # Externally reachable base URL used to build payer redirect targets
    public_base_url: str = Field(
        default="http://localhost:8080",
        validation_alias=AliasChoices("PUBLIC_BASE_URL", "RAILWAY_STATIC_URL", "RAILWAY_URL"),
    )

    # Hotel inventory (LiteAPI)
    liteapi_api_key: str | None = None
    liteapi_base_url: str = "https://api.liteapi.travel/v3.0"
    inventory_country_code: str = "PH"
    inventory_city_name: str = "Manila"
    inventory_timeout_seconds: float = 10.0
    inventory_retry_times: int = 2
    inventory_retry_sleep_ms: int = 300

    # Payment provider (PayPal)
    paypal_client_id: str | None = None
    paypal_client_secret: str | None = None
    paypal_base_url: str = "https://api-m.sandbox.paypal.com"
    paypal_timeout_seconds: float = 10.0
    paypal_webhook_id: str | None = None
    payment_currency: str = "USD"

    # Confirmation webhook authentication
    webhook_verifier: Literal["hmac", "paypal"] = "hmac"
    webhook_secret: str | None = None
    webhook_tolerance_seconds: int = 300

    # Notifications
    email_provider: Literal["sendgrid", "resend", "log"] = "sendgrid"
    email_from: str = "bookings@example.com"
    sendgrid_api_key: str | None = None
    resend_api_key: str | None = None
    sms_provider: Literal["twilio", "log"] = "twilio"
    twilio_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_phone_number: str | None = None
    notification_timeout_seconds: float = 10.0

    pending_booking_ttl_seconds: int = 3600

    @field_validator("public_base_url")
    @classmethod
    def normalize_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and "://" not in value:
            # Railway exposes the bare host name
            value = f"https://{value}"
        return value

    @field_validator("payment_currency")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3:
            raise ValueError("payment_currency must be a 3-letter ISO code")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
