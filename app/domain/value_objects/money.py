"""Value Object Money - a monetary amount with its currency."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary amount.

    Attributes:
        amount: Decimal amount, quantized to two decimal places.
        currency_code: ISO 4217 currency code (USD, PHP, EUR...).
    """

    amount: Decimal
    currency_code: str

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except InvalidOperation as exc:
                raise ValueError(f"amount is not a number: {self.amount!r}") from exc

        if not self.amount.is_finite():
            raise ValueError(f"amount is not a finite number: {self.amount}")

        try:
            object.__setattr__(self, "amount", self.amount.quantize(_CENT, rounding=ROUND_HALF_UP))
        except InvalidOperation as exc:
            raise ValueError(f"amount is too large: {self.amount}") from exc

        if len(self.currency_code) != 3:
            raise ValueError(f"currency_code must have 3 characters: {self.currency_code}")

        if self.amount < 0:
            raise ValueError(f"amount cannot be negative: {self.amount}")

    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    def to_provider_value(self) -> str:
        """Amount as the two-decimal string payment providers expect ("350.00")."""
        return f"{self.amount:.2f}"

    def display(self) -> str:
        """Human-readable amount used in notifications."""
        if self.currency_code == "USD":
            return f"${self.amount:.2f}"
        return f"{self.amount:.2f} {self.currency_code}"

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency_code}"

    @classmethod
    def parse(cls, raw: object, currency_code: str) -> "Money":
        """Build Money from user input (str, int, float or Decimal)."""
        if raw is None or isinstance(raw, bool):
            raise ValueError("amount is required")
        text = str(raw).strip()
        if not text:
            raise ValueError("amount is required")
        try:
            value = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"amount is not a number: {raw!r}") from exc
        return cls(amount=value, currency_code=currency_code)
