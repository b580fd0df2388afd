"""Terminal UI module for reelchat.

Provides a Textual-based TUI over a ChatSession.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Custom widgets (input history, chat rendering, reveal bubble, log)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- callbacks.py: Session integration (how TUI receives updates)
- app.py: Application orchestration (user interaction flow)
"""

from .app import CatalogChatApp, run_textual_tui
from .callbacks import TUIObserver
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusLine

__all__ = [
    "CatalogChatApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "StatusLine",
    "TUIObserver",
    "run_textual_tui",
]
