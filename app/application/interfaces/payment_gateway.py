from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.domain.value_objects.money import Money


@dataclass
class PaymentIntentResult:
    approve_url: str
    order_id: str | None = None
    status: str | None = None


class PaymentGateway(ABC):
    provider_name: str = "payment"

    @abstractmethod
    async def create_payment_intent(
        self,
        booking_id: int,
        amount: Money,
        description: str,
        return_url: str,
        cancel_url: str,
        payer_email: str | None = None,
    ) -> PaymentIntentResult:
        """
        Create a provider-side order for ``amount`` and return the payer redirect.

        Raises:
            AuthenticationError: credentials exchange returned no token.
            ProviderResponseError: order creation failed or had no approve link.
        """
        pass
