from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol


class TransactionManager(Protocol):
    """Unit of work boundary. Leaving ``start()`` without error commits."""

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield
