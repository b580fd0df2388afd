"""Transient state of an in-progress reveal."""

from dataclasses import dataclass


@dataclass
class RevealState:
    """A complete answer and how much of it is visible."""

    full_text: str
    revealed_length: int = 0

    @property
    def visible_text(self) -> str:
        return self.full_text[: self.revealed_length]

    @property
    def done(self) -> bool:
        return self.revealed_length >= len(self.full_text)
