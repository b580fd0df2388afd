"""Main Textual TUI application.

Orchestrates the UI components and hands user input to the chat session.
"""

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..session import ChatSession, SessionState
from .callbacks import TUIObserver
from .config import LogLevel
from .styles import APP_CSS
from .themes import SCREENING_ROOM
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, StatusLine


class CatalogChatApp(App):
    """Textual TUI for the catalog chat."""

    CSS = APP_CSS
    TITLE = "Netflix Recommendation Bot"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("escape", "cancel_send", "Cancel"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(self, session: ChatSession, log_level: str | None = None) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._current_worker = None

    @property
    def session(self) -> ChatSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        with Vertical(id="bottom-bar"):
            yield StatusLine(id="status")
            yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Wire the session to the widgets and render existing history."""
        self.register_theme(SCREENING_ROOM)
        self.theme = "screening-room"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")
        self._session.set_debug_callback(log_panel.route)

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        status = self.query_one("#status", StatusLine)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        self._session.set_observer(TUIObserver(chat, status, input_bar))

        gateway = self._session.gateway
        self.sub_title = f"{gateway.backend_type} | {len(self._session.catalog)} titles"

        for message in self._session.history:
            chat.add_message(message)
        input_bar.focus_input()

    def on_unmount(self) -> None:
        """Stop any pending reveal or gateway call before widgets go away."""
        self._session.close()
        self._session.set_observer(None)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._session.state is not SessionState.IDLE:
            self.notify("Still answering, please wait", severity="warning", timeout=2)
            self.query_one("#chat-input-bar", ChatInputBar).restore(event.value)
            return
        self._current_worker = self._send(event.value)

    @work(exclusive=True)
    async def _send(self, text: str) -> None:
        """Run one send through the session as a background async worker."""
        await self._session.submit(text)

    def action_clear_chat(self) -> None:
        """Clear the chat history back to the greeting."""
        if not self._session.reset():
            self.notify("Cannot clear while answering", severity="warning", timeout=2)
            return
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.clear_history()
        for message in self._session.history:
            chat.add_message(message)
        self.query_one("#status", StatusLine).clear_status()
        self.notify("Chat cleared", timeout=2)

    def action_cancel_send(self) -> None:
        """Cancel the in-flight send, rolling back the user turn."""
        if self._current_worker and self._current_worker.is_running:
            self._current_worker.cancel()
            chat = self.query_one("#chat-history", ChatHistoryWidget)
            chat.end_reveal()
            self.query_one("#status", StatusLine).clear_status()
            self.query_one("#chat-input-bar", ChatInputBar).set_busy(False)
            self.notify("Cancelled", severity="warning", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last model response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(session: ChatSession, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        session: Chat session to drive (closed when the app exits)
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = CatalogChatApp(session=session, log_level=log_level)
    try:
        await app.run_async()
    finally:
        await session.aclose()
