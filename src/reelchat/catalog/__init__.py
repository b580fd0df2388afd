"""Catalog module: the static title dataset and context selection."""

from .models import CatalogEntry
from .selector import GENERAL_KEYWORDS, find_title_matches, is_general_query, select_context
from .store import CatalogStore, default_catalog

__all__ = [
    "CatalogEntry",
    "CatalogStore",
    "GENERAL_KEYWORDS",
    "default_catalog",
    "find_title_matches",
    "is_general_query",
    "select_context",
]
