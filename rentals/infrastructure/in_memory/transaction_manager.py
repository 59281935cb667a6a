from contextlib import asynccontextmanager
from contextvars import ContextVar

from rentals.application.interfaces.transaction_manager import TransactionManager


class InMemoryTransactionManager(TransactionManager):
    """
    Unit-of-work stand-in for the in-memory stores.

    Writes are applied immediately, so there is nothing to undo; the manager
    only mirrors the nesting rules of the SQL one and counts outcomes of the
    outermost scope. Nesting depth is tracked per task.
    """

    def __init__(self):
        self._depth: ContextVar[int] = ContextVar("in_memory_tx_depth", default=0)
        self.commits = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def start(self):
        outermost = self._depth.get() == 0
        token = self._depth.set(self._depth.get() + 1)
        try:
            yield
        except BaseException:
            if outermost:
                self.rollbacks += 1
            raise
        else:
            if outermost:
                self.commits += 1
        finally:
            self._depth.reset(token)
