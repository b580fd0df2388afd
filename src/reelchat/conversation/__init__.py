"""Conversation module: message types and session history."""

from .history import ConversationHistory
from .models import Message, ModelMessage, UserMessage, message_from_wire

__all__ = [
    "ConversationHistory",
    "Message",
    "ModelMessage",
    "UserMessage",
    "message_from_wire",
]
