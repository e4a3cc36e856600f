BOOKING_STATUS_PENDING = "pending"
BOOKING_STATUS_CONFIRMED = "confirmed"
BOOKING_STATUS_FAILED = "failed"

FAILURE_REASON_PAYMENT_PROVIDER = "PAYMENT_PROVIDER_ERROR"
FAILURE_REASON_EXPIRED = "EXPIRED"

DATE_NOT_AVAILABLE = "N/A"
DEFAULT_GUESTS = 1
DEFAULT_CURRENCY = "USD"

# Largest id a 64-bit signed INTEGER column can hold
MAX_BOOKING_ID = 2**63 - 1
