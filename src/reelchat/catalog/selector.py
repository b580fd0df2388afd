"""Context selection for grounding.

Maps a free-text query to the slice of the catalog that should be injected
into the system instruction. Selection runs in strict priority order:

1. Titles named in the query -> only those entries
2. General keywords or a genre named in the query -> the whole catalog
3. Anything else -> no context at all

Returning nothing for unknown titles and out-of-scope questions leaves the
model with only the refusal policy to work from.
"""

from .models import CatalogEntry
from .store import CatalogStore

GENERAL_KEYWORDS = (
    "recommend",
    "rating",
    "director",
    "genre",
    "show me",
    "about",
)


def find_title_matches(query: str, catalog: CatalogStore) -> list[CatalogEntry]:
    """Return entries whose title appears in the query (case-insensitive)."""
    lower_query = query.lower()
    return [entry for entry in catalog if entry.title.lower() in lower_query]


def is_general_query(query: str, catalog: CatalogStore) -> bool:
    """Check whether the query asks about the catalog as a whole.

    True when the query contains a general keyword, or contains the full
    genre label of any entry.
    """
    lower_query = query.lower()
    if any(keyword in lower_query for keyword in GENERAL_KEYWORDS):
        return True
    return any(entry.genre.lower() in lower_query for entry in catalog)


def select_context(query: str, catalog: CatalogStore) -> str:
    """Select serialized grounding context for a query.

    Args:
        query: The user's input
        catalog: Catalog to select from

    Returns:
        JSON text of the relevant entries, or an empty string when the query
        names no known title and is not a general catalog question
    """
    matches = find_title_matches(query, catalog)
    if matches:
        return catalog.to_json(matches)

    if is_general_query(query, catalog):
        return catalog.to_json()

    return ""
