from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from ..cancellation import CancellationToken
from ..conversation import Message

DebugCallback = Callable[[str, str, str], None]


class ResponseGateway(ABC):
    """Abstract base class for completion gateways.

    This module hides the design decision of where answers come from.
    Implementations must handle:
    - Converting conversation history to the remote schema
    - Translating remote failures into GatewayError
    - Honoring the cancellation token on teardown

    Every call performs exactly one remote request; no retries are attempted.

    Supports async context manager protocol for proper resource cleanup:
        async with gateway:
            reply = await gateway.generate(history, instruction)
    """

    _debug_callback: DebugCallback | None = None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the callback receiving (level, component, message) log lines."""
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback(level, "Gateway", message)

    @abstractmethod
    async def generate(
        self,
        history: Sequence[Message],
        system_instruction: str,
        token: CancellationToken | None = None,
    ) -> str:
        """Request one complete answer for the conversation.

        Args:
            history: Ordered user/model turns, newest last
            system_instruction: Scope policy plus optional grounding context
            token: Cancellation token; a cancelled token abandons the request

        Returns:
            The full response text

        Raises:
            GatewayError: If the remote call fails or reports an error
            OperationCancelled: If the token is cancelled before completion
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "ResponseGateway":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
