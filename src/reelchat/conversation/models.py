"""Message types for the conversation.

Messages are a tagged union discriminated on ``role``. The gateway wire
shape (``{"role": ..., "parts": [{"text": ...}]}``) is produced and parsed
only here.
"""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _BaseMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Message text")
    timestamp: datetime = Field(default_factory=datetime.now)

    def to_wire(self) -> dict[str, Any]:
        """Convert to the gateway's history turn schema."""
        return {"role": self.role, "parts": [{"text": self.text}]}


class UserMessage(_BaseMessage):
    """A turn typed by the user."""

    role: Literal["user"] = "user"


class ModelMessage(_BaseMessage):
    """A turn produced by the model."""

    role: Literal["model"] = "model"


Message = Annotated[UserMessage | ModelMessage, Field(discriminator="role")]

_MESSAGE = TypeAdapter(Message)


def message_from_wire(turn: dict[str, Any]) -> UserMessage | ModelMessage:
    """Parse a wire history turn into a message.

    Raises:
        ValueError: If the turn has no text part or an unknown role
    """
    parts = turn.get("parts") or []
    if not parts or "text" not in parts[0]:
        raise ValueError("History turn has no text part")
    return _MESSAGE.validate_python({"role": turn.get("role"), "text": parts[0]["text"]})
