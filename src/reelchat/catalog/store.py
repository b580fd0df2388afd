"""Static, read-only catalog of titles.

Hides how the catalog is stored and serialized for prompt injection.
"""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import TypeAdapter

from .models import CatalogEntry

_DEFAULT_ENTRIES = (
    CatalogEntry(
        title="The Midnight Sky",
        year=2020,
        genre="Sci-Fi, Drama",
        director="George Clooney",
        rating=7.0,
        summary=(
            "A lone scientist in the Arctic races to stop a team of astronauts "
            "from returning home to a mysterious global catastrophe."
        ),
    ),
    CatalogEntry(
        title="Queen's Gambit",
        year=2020,
        genre="Drama",
        director="Scott Frank",
        rating=9.2,
        summary=(
            "Orphaned chess prodigy Beth Harmon fights addiction and prejudice "
            "in her quest to become the world's greatest chess player."
        ),
    ),
    CatalogEntry(
        title="Squid Game",
        year=2021,
        genre="Thriller, Survival",
        director="Hwang Dong-hyuk",
        rating=8.0,
        summary=(
            "Hundreds of cash-strapped contestants accept a strange invitation to "
            "compete in children's games for a tempting prize, but the stakes are deadly."
        ),
    ),
    CatalogEntry(
        title="The Crown",
        year=2016,
        genre="Historical Drama",
        director="Peter Morgan",
        rating=8.7,
        summary=(
            "Follows the political rivalries and romance of Queen Elizabeth II's reign, "
            "and the events that shaped the second half of the 20th century."
        ),
    ),
)

_ENTRY_LIST = TypeAdapter(list[CatalogEntry])


class CatalogStore:
    """Immutable collection of catalog entries.

    The entry order is preserved everywhere: iteration, selection results
    and serialized output all follow the order the entries were given in.
    """

    def __init__(self, entries: Iterable[CatalogEntry]):
        self._entries = tuple(entries)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "CatalogStore":
        """Load a catalog from a JSON array of entry objects.

        Raises:
            FileNotFoundError: If the file does not exist
            pydantic.ValidationError: If an entry is malformed
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls(_ENTRY_LIST.validate_json(raw))

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def to_json(self, entries: Iterable[CatalogEntry] | None = None) -> str:
        """Serialize entries as a pretty-printed JSON array.

        Args:
            entries: Subset to serialize (None serializes the whole catalog)

        Returns:
            JSON text with two-space indentation
        """
        selected = self._entries if entries is None else tuple(entries)
        return json.dumps(
            [_json_fields(entry) for entry in selected],
            indent=2,
            ensure_ascii=False,
        )


def _json_fields(entry: CatalogEntry) -> dict:
    """Dump an entry, writing whole-number ratings without a fraction (7, not 7.0)."""
    fields = entry.model_dump()
    if fields["rating"].is_integer():
        fields["rating"] = int(fields["rating"])
    return fields

def default_catalog() -> CatalogStore:
    """Return the built-in four-title catalog."""
    return CatalogStore(_DEFAULT_ENTRIES)
