"""Ordered conversation history."""

from collections.abc import Iterator
from typing import Any

from .models import Message


class ConversationHistory:
    """Append-only list of messages owned by a chat session.

    The only removal allowed is dropping the last message, used to roll back
    an optimistic user turn when the gateway call fails.
    """

    def __init__(self, messages: list[Message] | None = None):
        self._messages: list[Message] = list(messages or [])

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def remove_last(self) -> Message:
        """Remove and return the most recent message.

        Raises:
            IndexError: If the history is empty
        """
        if not self._messages:
            raise IndexError("Cannot remove from an empty history")
        return self._messages.pop()

    def clear(self) -> None:
        self._messages.clear()

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the messages in insertion order."""
        return tuple(self._messages)

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def to_wire(self) -> list[dict[str, Any]]:
        """Serialize the whole history in the gateway's wire shape."""
        return [message.to_wire() for message in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)
