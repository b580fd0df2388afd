"""Cooperative cancellation for session-owned async work.

A token is cancelled once, on session teardown. Work that holds the token
either races against it (gateway requests) or checks it between steps
(reveal ticks).
"""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class OperationCancelled(Exception):
    """Raised when work is abandoned because its token was cancelled."""


class CancellationToken:
    """One-shot cancellation signal."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token is cancelled first.

        The underlying task is cancelled when the token wins the race.

        Raises:
            OperationCancelled: If the token was or becomes cancelled
        """
        task = asyncio.ensure_future(awaitable)
        if self.cancelled:
            task.cancel()
            raise OperationCancelled()

        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task.done():
            return task.result()

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        raise OperationCancelled()
