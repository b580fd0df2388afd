"""Reveal module: paced display of complete answers."""

from .models import RevealState
from .scheduler import DEFAULT_INTERVAL, RevealScheduler

__all__ = ["DEFAULT_INTERVAL", "RevealScheduler", "RevealState"]
