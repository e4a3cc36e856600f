"""Domain exceptions for the booking service.

Every error carries a machine-readable ``code`` and the HTTP status the API
boundary answers with. Provider and store failures are ``safe_to_expose = False``:
their message stays in the server log and clients get a generic one.
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    http_status: int = 500
    safe_to_expose: bool = True
    # sent to clients instead of ``message`` when safe_to_expose is False
    public_message: str = "An unexpected error occurred"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Input ===


class ValidationError(DomainError):
    """Missing or malformed input. Raised before any side effect."""

    http_status = 400

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Invalid '{field}': {message}",
            code="VALIDATION_ERROR",
        )
        self.field = field


class WebhookVerificationError(DomainError):
    """The confirmation callback could not be authenticated."""

    http_status = 401

    def __init__(self, reason: str):
        super().__init__(
            message=f"Webhook verification failed: {reason}",
            code="WEBHOOK_VERIFICATION_FAILED",
        )
        self.reason = reason


# === Booking ===


class BookingNotFoundError(DomainError):
    """The booking does not exist."""

    http_status = 404

    def __init__(self, booking_id: int | str):
        super().__init__(
            message=f"Booking not found: {booking_id}",
            code="BOOKING_NOT_FOUND",
        )
        self.booking_id = booking_id


class InvalidBookingStatusError(DomainError):
    """The booking status does not allow the requested transition."""

    http_status = 409

    def __init__(self, booking_id: int | None, current_status: str, target_status: str):
        super().__init__(
            message=(
                f"Booking {booking_id} cannot move from '{current_status}' "
                f"to '{target_status}'"
            ),
            code="INVALID_BOOKING_STATUS",
        )
        self.booking_id = booking_id
        self.current_status = current_status
        self.target_status = target_status


class PaymentMismatchError(DomainError):
    """The confirmed amount differs from the amount stored on the booking."""

    http_status = 409

    def __init__(self, booking_id: int, expected: str, received: str):
        super().__init__(
            message=f"Amount mismatch for booking {booking_id}: expected {expected}, received {received}",
            code="PAYMENT_AMOUNT_MISMATCH",
        )
        self.booking_id = booking_id
        self.expected = expected
        self.received = received


# === Providers ===


class ProviderError(DomainError):
    """Base class for failures of an external provider."""

    safe_to_expose = False
    public_message = "Payment provider error"


class AuthenticationError(ProviderError):
    """The payment provider refused the client credentials or returned no token."""

    def __init__(self, provider: str, message: str = "No access token in provider response"):
        super().__init__(message=f"{provider}: {message}", code="PROVIDER_AUTHENTICATION_FAILED")
        self.provider = provider


class ProviderResponseError(ProviderError):
    """The payment provider answered with an error or an unexpected payload."""

    def __init__(self, provider: str, message: str, http_status_code: int | None = None):
        super().__init__(message=f"{provider}: {message}", code="PROVIDER_RESPONSE_ERROR")
        self.provider = provider
        self.provider_http_status = http_status_code


class InventoryUnavailableError(ProviderError):
    """The hotel catalog could not be fetched or parsed."""

    http_status = 503
    public_message = "Hotel inventory is temporarily unavailable"

    def __init__(self, provider: str, message: str):
        super().__init__(message=f"{provider}: {message}", code="INVENTORY_UNAVAILABLE")
        self.provider = provider


class DeliveryError(ProviderError):
    """The notification channel failed to deliver the message."""

    public_message = "Notification could not be delivered"

    def __init__(self, channel: str, provider: str, message: str):
        super().__init__(
            message=f"{provider} ({channel}): {message}",
            code="NOTIFICATION_DELIVERY_FAILED",
        )
        self.channel = channel
        self.provider = provider


# === Persistence ===


class StoreError(DomainError):
    """Persistence failure. Fatal to the request, not to the process."""

    safe_to_expose = False
    public_message = "Booking store unavailable"

    def __init__(self, operation: str, message: str):
        super().__init__(message=f"Store failure during {operation}: {message}", code="STORE_ERROR")
        self.operation = operation
