"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering and the live reveal bubble
- Status line (loading and error indicators)
- Level-filtered log rendering
"""

from datetime import datetime

from rich.text import Text
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, RichLog, Static, TextArea

from ..conversation import Message
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    REVEAL_CURSOR,
    LogLevel,
)


def _copy(widget, text: str, label: str) -> None:
    """Copy text to the system clipboard, falling back to OSC 52."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{label} copied", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} copied (terminal)", timeout=2)


class ClickableMessage(Vertical):
    """A chat message container that copies its text when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        _copy(self, self._content, "Message")


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    BINDINGS = [
        Binding("enter", "submit", "Send", priority=True),
    ]

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Submit message (Enter or Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Enter is a priority binding so the TextArea never inserts a newline;
        ctrl+j is kept as an alias for terminals that remap Enter.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def action_submit(self) -> None:
        self._submit()

    def _submit(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text.strip()
        if not value:
            return
        if not self._history or self._history[-1] != value:
            self._history.append(value)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        text_area.text = ""
        self.post_message(self.Submitted(value))

    def restore(self, value: str) -> None:
        """Put text back into the input, e.g. after a failed send."""
        text_area = self.query_one("#chat-input", TextArea)
        if not text_area.text:
            text_area.text = value

    def set_busy(self, busy: bool) -> None:
        """Disable the Send button while a send is in flight."""
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        self.query_one("#chat-input", TextArea).focus()


class StatusLine(Static):
    """One-line loading/error indicator under the chat."""

    def show_loading(self) -> None:
        self.remove_class("-error")
        self.add_class("-loading")
        self.update("Thinking...")

    def show_error(self, message: str) -> None:
        self.remove_class("-loading")
        self.add_class("-error")
        self.update(Text(f"Error: {message}"))

    def clear_status(self) -> None:
        self.remove_class("-loading", "-error")
        self.update("")


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history plus the live reveal bubble."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered: list[tuple[Message, ClickableMessage]] = []
        self._reveal_body: Static | None = None
        self._reveal_container: Vertical | None = None

    @staticmethod
    def _header(role: str, timestamp: datetime) -> str:
        icon, name = (">", "You") if role == "user" else ("<", "Assistant")
        return f"{icon} {name} [{timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)}]"

    def add_message(self, message: Message) -> None:
        """Render a committed message."""
        container = ClickableMessage(
            content=message.text,
            classes=f"chat-message {message.role}-message",
        )
        container.compose_add_child(
            Static(self._header(message.role, message.timestamp), classes="message-header")
        )
        container.compose_add_child(Static(Text(message.text), classes="message-content"))
        self._rendered.append((message, container))
        self.mount(container, before=self._reveal_container)
        self._update_subtitle()
        self.scroll_end(animate=False)

    def remove_message(self, message: Message) -> None:
        """Remove a rendered message (used for rolled-back user turns)."""
        for index, (rendered, container) in enumerate(self._rendered):
            if rendered is message:
                container.remove()
                del self._rendered[index]
                break
        self._update_subtitle()

    def update_reveal(self, visible_text: str) -> None:
        """Show the partially revealed answer with a typing cursor."""
        if self._reveal_container is None:
            self._reveal_body = Static("", classes="message-content")
            self._reveal_container = Vertical(
                classes="chat-message model-message revealing"
            )
            self._reveal_container.compose_add_child(
                Static(self._header("model", datetime.now()), classes="message-header")
            )
            self._reveal_container.compose_add_child(self._reveal_body)
            self.mount(self._reveal_container)
        self._reveal_body.update(Text(visible_text + REVEAL_CURSOR))
        self.scroll_end(animate=False)

    def end_reveal(self) -> None:
        """Drop the live reveal bubble."""
        if self._reveal_container is not None:
            self._reveal_container.remove()
        self._reveal_container = None
        self._reveal_body = None

    def get_last_response(self) -> str | None:
        for message, _ in reversed(self._rendered):
            if message.role == "model":
                return message.text
        return None

    def clear_history(self) -> None:
        self.end_reveal()
        self._rendered.clear()
        self.remove_children()
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        count = len(self._rendered)
        self.border_subtitle = f"{count} messages" if count else "Conversation history"


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Session": "green",
        "Gateway": "magenta",
        "Reveal": "bright_yellow",
    }

    def __init__(self, *args, log_level: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {self._log_level.name}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        self.display = False

    def write_entry(self, component: str, message: str, level: LogLevel = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text.from_markup(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{level.name:<5}[/] "
            f"[{comp_color}]\\[{component}][/] "
        )
        line.append(message)
        self.write(line)

    def route(self, level: str, component: str, message: str) -> None:
        """Debug-callback entry point: (level name, component, message)."""
        self.write_entry(component, message, LogLevel.from_string(level))

    def info(self, component: str, message: str) -> None:
        self.write_entry(component, message, LogLevel.INFO)

    def error(self, component: str, message: str) -> None:
        self.write_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = "\n".join(line.text for line in self.lines)
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        _copy(self, text, "Log")
