import logging
from dataclasses import dataclass
from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.inventory_gateway import InventoryGateway
from app.application.interfaces.payment_gateway import PaymentGateway
from app.application.interfaces.webhook_verifier import WebhookVerifier
from app.application.use_cases.confirm_booking import ConfirmBookingUseCase
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.application.use_cases.expire_pending_bookings import ExpirePendingBookingsUseCase
from app.application.use_cases.get_booking import GetBookingUseCase
from app.application.use_cases.list_hotels import ListHotelsUseCase
from app.application.use_cases.notify_booking import NotifyBookingUseCase
from app.config import Settings
from app.infrastructure.db.engine import build_engine, build_sessionmaker, init_schema
from app.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from app.infrastructure.gateways.hmac_webhook_verifier import HmacWebhookVerifier
from app.infrastructure.gateways.liteapi_inventory_gateway import LiteApiInventoryGateway
from app.infrastructure.gateways.notifier_selector import NotifierSelector, build_notifier_selector
from app.infrastructure.gateways.paypal_payment_gateway import PayPalPaymentGateway
from app.infrastructure.gateways.paypal_webhook_verifier import PayPalWebhookVerifier
from app.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from app.infrastructure.in_memory.inventory_gateway import StubInventoryGateway
from app.infrastructure.in_memory.notification_channel import LogNotificationChannel
from app.infrastructure.in_memory.payment_gateway import StubPaymentGateway
from app.infrastructure.in_memory.transaction_manager import NoopTransactionManager

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Long-lived collaborators shared by every request.

    Built once per application and started in the lifespan, so the store
    schema exists before the first request is served. In SQL mode a session
    is opened per request; in in-memory mode ``booking_repo`` is shared.
    """

    settings: Settings
    inventory_gateway: InventoryGateway
    payment_gateway: PaymentGateway
    webhook_verifier: WebhookVerifier
    notifier_selector: NotifierSelector
    clock: Clock
    booking_repo: BookingRepo | None = None
    engine: AsyncEngine | None = None
    session_maker: async_sessionmaker[AsyncSession] | None = None

    @property
    def uses_sql(self) -> bool:
        return self.session_maker is not None

    async def start(self) -> None:
        if self.engine is not None:
            await init_schema(self.engine)
            logger.info("Booking store ready", extra={"store": "sql"})
        else:
            logger.info("Booking store ready", extra={"store": "in_memory"})

    async def stop(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


def build_webhook_verifier(settings: Settings) -> WebhookVerifier:
    if settings.webhook_verifier == "paypal":
        return PayPalWebhookVerifier(
            client_id=settings.paypal_client_id,
            client_secret=settings.paypal_client_secret,
            webhook_id=settings.paypal_webhook_id,
            base_url=settings.paypal_base_url,
            timeout_seconds=settings.paypal_timeout_seconds,
        )
    return HmacWebhookVerifier(
        secret=settings.webhook_secret,
        tolerance_seconds=settings.webhook_tolerance_seconds,
    )


def build_container(settings: Settings) -> ServiceContainer:
    webhook_verifier = build_webhook_verifier(settings)

    if settings.use_in_memory:
        notifier_selector = NotifierSelector()
        notifier_selector.register(LogNotificationChannel("email"))
        notifier_selector.register(LogNotificationChannel("sms"))
        return ServiceContainer(
            settings=settings,
            inventory_gateway=StubInventoryGateway(),
            payment_gateway=StubPaymentGateway(),
            webhook_verifier=webhook_verifier,
            notifier_selector=notifier_selector,
            clock=SystemClock(),
            booking_repo=InMemoryBookingRepo(),
        )

    engine = build_engine(settings)
    return ServiceContainer(
        settings=settings,
        inventory_gateway=LiteApiInventoryGateway(
            api_key=settings.liteapi_api_key,
            base_url=settings.liteapi_base_url,
            country_code=settings.inventory_country_code,
            city_name=settings.inventory_city_name,
            timeout_seconds=settings.inventory_timeout_seconds,
            retry_times=settings.inventory_retry_times,
            retry_sleep_ms=settings.inventory_retry_sleep_ms,
        ),
        payment_gateway=PayPalPaymentGateway(
            client_id=settings.paypal_client_id,
            client_secret=settings.paypal_client_secret,
            base_url=settings.paypal_base_url,
            timeout_seconds=settings.paypal_timeout_seconds,
        ),
        webhook_verifier=webhook_verifier,
        notifier_selector=build_notifier_selector(settings),
        clock=SystemClock(),
        engine=engine,
        session_maker=build_sessionmaker(engine),
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


async def get_session(
    container: ServiceContainer = Depends(get_container),
) -> AsyncIterator[AsyncSession | None]:
    if not container.uses_sql:
        yield None
        return
    async with container.session_maker() as session:
        yield session


def get_use_cases(
    container: ServiceContainer = Depends(get_container),
    session: AsyncSession | None = Depends(get_session),
) -> dict:
    settings = container.settings
    if container.uses_sql:
        if session is None:
            raise RuntimeError("DB session not available")
        booking_repo = BookingRepoSQL(session)
        tx_manager = SQLAlchemyTransactionManager(session)
    else:
        booking_repo = container.booking_repo
        tx_manager = NoopTransactionManager()

    return {
        "list_hotels": ListHotelsUseCase(inventory_gateway=container.inventory_gateway),
        "create_booking": CreateBookingUseCase(
            booking_repo=booking_repo,
            payment_gateway=container.payment_gateway,
            transaction_manager=tx_manager,
            public_base_url=settings.public_base_url,
            currency_code=settings.payment_currency,
            clock=container.clock,
        ),
        "get_booking": GetBookingUseCase(booking_repo=booking_repo, transaction_manager=tx_manager),
        "confirm_booking": ConfirmBookingUseCase(
            booking_repo=booking_repo,
            transaction_manager=tx_manager,
            clock=container.clock,
        ),
        "notify_booking": NotifyBookingUseCase(
            booking_repo=booking_repo,
            transaction_manager=tx_manager,
            notifier_selector=container.notifier_selector,
        ),
        "expire_bookings": ExpirePendingBookingsUseCase(
            booking_repo=booking_repo,
            transaction_manager=tx_manager,
            ttl_seconds=settings.pending_booking_ttl_seconds,
            clock=container.clock,
        ),
    }
