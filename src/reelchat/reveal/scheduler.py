"""Timed character-by-character reveal of a complete answer.

The answer is already fully known; the reveal only paces how fast it
appears. Each reveal runs as one asyncio task that can be cancelled
explicitly, by starting another reveal, or through a cancellation token.
"""

import asyncio
from collections.abc import Callable

from ..cancellation import CancellationToken
from .models import RevealState

DEFAULT_INTERVAL = 0.03  # Seconds per character

StepCallback = Callable[[str], None]
CompleteCallback = Callable[[str], None]


class RevealScheduler:
    """Reveals one answer at a time at a fixed per-character interval.

    For an answer of length N, ``on_step`` is called exactly N times with the
    growing visible prefix, then ``on_complete`` is called once with the full
    text. A cancelled reveal never calls ``on_complete``.
    """

    def __init__(self, interval: float = DEFAULT_INTERVAL):
        if interval < 0:
            raise ValueError("Reveal interval must be non-negative")
        self._interval = interval
        self._state: RevealState | None = None
        self._task: asyncio.Task | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def state(self) -> RevealState | None:
        """The active reveal, or None when idle."""
        return self._state

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(
        self,
        full_text: str,
        on_step: StepCallback,
        on_complete: CompleteCallback,
        token: CancellationToken | None = None,
    ) -> asyncio.Task:
        """Start revealing ``full_text``, superseding any active reveal.

        Must be called from a running event loop.

        Returns:
            The task driving the reveal
        """
        self.cancel()
        state = RevealState(full_text=full_text)
        self._state = state
        self._task = asyncio.create_task(self._run(state, on_step, on_complete, token))
        return self._task

    def cancel(self) -> None:
        """Stop the active reveal without committing it."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._state = None

    async def wait(self) -> None:
        """Wait until the active reveal completes or is cancelled.

        Cancelling the reveal does not raise here; cancelling the waiter does.
        """
        task = self._task
        if task is None or task.done():
            return
        await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            raise task.exception()

    async def _run(
        self,
        state: RevealState,
        on_step: StepCallback,
        on_complete: CompleteCallback,
        token: CancellationToken | None,
    ) -> None:
        try:
            while not state.done:
                await asyncio.sleep(self._interval)
                if token is not None and token.cancelled:
                    return
                state.revealed_length += 1
                on_step(state.visible_text)
            if token is not None and token.cancelled:
                return
            on_complete(state.full_text)
        finally:
            if self._state is state:
                self._state = None
