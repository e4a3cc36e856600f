from uuid import uuid4

from app.application.interfaces.payment_gateway import PaymentGateway, PaymentIntentResult
from app.domain.value_objects.money import Money


class StubPaymentGateway(PaymentGateway):
    provider_name = "stub"

    def __init__(self, approve_base_url: str = "https://payments.example.com/checkoutnow") -> None:
        self._approve_base_url = approve_base_url
        self.requests: list[dict] = []
        # set by tests to simulate a provider failure
        self.error: Exception | None = None

    async def create_payment_intent(
        self,
        booking_id: int,
        amount: Money,
        description: str,
        return_url: str,
        cancel_url: str,
        payer_email: str | None = None,
    ) -> PaymentIntentResult:
        order_id = f"ORDER-{uuid4().hex[:12].upper()}"
        self.requests.append(
            {
                "booking_id": booking_id,
                "amount": amount,
                "description": description,
                "return_url": return_url,
                "cancel_url": cancel_url,
                "payer_email": payer_email,
            }
        )
        if self.error is not None:
            raise self.error
        return PaymentIntentResult(
            approve_url=f"{self._approve_base_url}?token={order_id}",
            order_id=order_id,
            status="CREATED",
        )
