"""Session observer for the TUI.

Hides the details of how the TUI receives updates from the chat session.
The session runs in an async worker on the app's event loop, so widgets
are updated directly.
"""

from typing import TYPE_CHECKING

from ..conversation import ModelMessage, UserMessage
from ..session import SessionObserver, SessionState

if TYPE_CHECKING:
    from .widgets import ChatHistoryWidget, ChatInputBar, StatusLine


class TUIObserver(SessionObserver):
    """Renders session events into the chat widgets."""

    def __init__(
        self,
        chat: "ChatHistoryWidget",
        status: "StatusLine",
        input_bar: "ChatInputBar",
    ) -> None:
        self.chat = chat
        self.status = status
        self.input_bar = input_bar

    def on_state_changed(self, state: SessionState) -> None:
        self.input_bar.set_busy(state is not SessionState.IDLE)
        if state is SessionState.AWAITING_GATEWAY:
            self.status.show_loading()
        elif state is SessionState.REVEALING:
            self.status.clear_status()

    def on_user_message(self, message: UserMessage) -> None:
        self.chat.add_message(message)

    def on_user_message_removed(self, message: UserMessage) -> None:
        self.chat.remove_message(message)
        self.input_bar.restore(message.text)

    def on_reveal_step(self, visible_text: str) -> None:
        self.chat.update_reveal(visible_text)

    def on_model_message(self, message: ModelMessage) -> None:
        self.chat.end_reveal()
        self.chat.add_message(message)

    def on_error(self, message: str) -> None:
        self.status.show_error(message)
        self.chat.app.notify(f"Error: {message[:50]}", severity="error", timeout=5)
