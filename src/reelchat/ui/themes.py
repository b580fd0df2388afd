"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Dark theater palette: red curtain accent on near-black
SCREENING_ROOM = Theme(
    name="screening-room",
    primary="#e50914",      # Signature red - main accent
    secondary="#f5c518",    # Marquee gold - model messages
    accent="#ffb4a2",       # Soft coral - highlights
    foreground="#e5e5e5",   # Light text
    background="#0b0b0b",   # Deepest background
    success="#46d369",      # Green - user messages, send button
    warning="#f5a623",      # Amber - warnings
    error="#ff5c5c",        # Red - errors
    surface="#181818",      # Main surface
    panel="#141414",        # Panel backgrounds
    dark=True,
    variables={
        "block-cursor-foreground": "#0b0b0b",
        "block-cursor-background": "#e5e5e5",
        "block-cursor-text-style": "bold",
        "input-cursor-background": "#e5e5e5",
        "input-cursor-foreground": "#0b0b0b",
        "input-selection-background": "#e50914 30%",

        "border": "#333333",
        "border-blurred": "#222222",

        "scrollbar": "#2a2a2a",
        "scrollbar-hover": "#3a3a3a",
        "scrollbar-active": "#e50914",
        "scrollbar-background": "#141414",

        "footer-foreground": "#b3b3b3",
        "footer-background": "#0b0b0b",
        "footer-key-foreground": "#f5c518",
        "footer-key-background": "#2a2a2a",

        "text-muted": "#808080",
        "text-disabled": "#4d4d4d",
    },
)
