"""
Task-execution context injected into the traversal engine.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Dict, Optional, TypeVar

from .result import AsyncResult, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TaskPool:
    """
    Schedules graph lookups for one engine.

    Only leaf lookups (calls into a GraphClient) hold a slot, so a traversal
    nested inside another traversal never waits on a slot its parent holds.
    """

    def __init__(self, max_concurrency: Optional[int] = None):
        """
        Args:
            max_concurrency: Upper bound on lookups in flight at once.
                None, 0 or a negative value means unbounded.
        """
        if max_concurrency is not None and max_concurrency > 0:
            self.max_concurrency: Optional[int] = max_concurrency
            self._semaphore: Optional[asyncio.Semaphore] = asyncio.Semaphore(max_concurrency)
        else:
            self.max_concurrency = None
            self._semaphore = None

        self.in_flight = 0
        self.peak_in_flight = 0
        self.completed = 0

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one lookup slot for the duration of the block."""
        if self._semaphore is not None:
            await self._semaphore.acquire()
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            yield
        finally:
            self.in_flight -= 1
            self.completed += 1
            if self._semaphore is not None:
                self._semaphore.release()

    def run(self, lookup: Callable[[], AsyncResult[T]]) -> AsyncResult[T]:
        """Run a client lookup once a slot is free."""
        async def bounded() -> Result[T]:
            async with self.slot():
                return await lookup()

        return AsyncResult(bounded())

    def stats(self) -> Dict[str, Optional[int]]:
        return {
            "max_concurrency": self.max_concurrency,
            "in_flight": self.in_flight,
            "peak_in_flight": self.peak_in_flight,
            "completed": self.completed,
        }
