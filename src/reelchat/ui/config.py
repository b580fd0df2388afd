"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Debug-callback levels, ordered so that higher means more severe."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """Parse a level name case-insensitively, defaulting to DEBUG."""
        return cls.__members__.get(level_str.upper(), cls.DEBUG)


# Reveal pacing
TYPING_SPEED_MS = 30  # Milliseconds per revealed character

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display configuration
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"
REVEAL_CURSOR = "▌"
