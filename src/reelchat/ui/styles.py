"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - chat on top, input below
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

/* ============================================
   Debug Panel - hidden until toggled
   ============================================ */
#debug-panel {
    height: 12;
    background: $surface;
    border: round $warning 50%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    padding: 0 1;
}

/* ============================================
   Bottom Bar - Status + Input
   ============================================ */
#bottom-bar {
    height: auto;
    padding: 0 1 1 1;
    background: $panel;
    border-top: solid $border;
}

#status {
    height: 1;
    padding: 0 2;
    color: $text-muted;

    &.-loading {
        color: $accent;
        text-style: italic;
    }

    &.-error {
        color: $error;
        text-style: bold;
    }
}

ChatInputBar {
    height: 5;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;
}

#send-btn {
    width: 10;
    height: 100%;
    margin: 0 0 0 1;
    min-width: 8;
    border: tall $success;
    background: $success;
    color: $background;
    text-style: bold;

    &:disabled {
        background: $surface;
        border: tall $border;
        color: $text-disabled;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    background: transparent;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.model-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.revealing {
    border-left: tall $accent;
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
    color: $foreground;
}
"""
