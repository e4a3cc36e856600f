from contextlib import asynccontextmanager

from app.application.interfaces.transaction_manager import TransactionManager


class NoopTransactionManager(TransactionManager):
    """In-memory writes are applied immediately; there is nothing to commit."""

    @asynccontextmanager
    async def start(self):
        yield
