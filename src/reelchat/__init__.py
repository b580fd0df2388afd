"""
Reelchat: a catalog-grounded chat assistant for a small set of streaming titles.

Answers are restricted to the catalog through prompt-level grounding, and
complete answers are revealed character by character.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .catalog import CatalogEntry, CatalogStore, default_catalog, select_context
from .conversation import ConversationHistory, ModelMessage, UserMessage
from .gateway import GatewayError, ResponseGateway, create_response_gateway
from .prompts import build_system_instruction
from .reveal import RevealScheduler
from .session import ChatSession, SessionObserver, SessionState

__all__ = [
    "CatalogEntry",
    "CatalogStore",
    "ChatSession",
    "ConversationHistory",
    "GatewayError",
    "ModelMessage",
    "ResponseGateway",
    "RevealScheduler",
    "SessionObserver",
    "SessionState",
    "UserMessage",
    "build_system_instruction",
    "create_response_gateway",
    "default_catalog",
    "select_context",
]
