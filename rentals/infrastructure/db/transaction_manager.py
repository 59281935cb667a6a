from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from rentals.application.interfaces.transaction_manager import TransactionManager


class SQLAlchemyTransactionManager(TransactionManager):
    """
    Commits on success and rolls back on any exception, timeouts and
    cancellation included. Nested ``start()`` calls join the outer one.

    Reads issued before ``start()`` autobegin a transaction on the session;
    it is committed (or rolled back) here as well.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._depth = 0

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._depth:
            yield
            return

        self._depth += 1
        try:
            yield
        except BaseException:
            await self._session.rollback()
            raise
        else:
            await self._session.commit()
        finally:
            self._depth -= 1
