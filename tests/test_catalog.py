"""Unit tests for the catalog module."""
import json

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from reelchat.catalog import (
    GENERAL_KEYWORDS,
    CatalogEntry,
    CatalogStore,
    find_title_matches,
    is_general_query,
    select_context,
)


def _titles(context: str) -> list[str]:
    return [item["title"] for item in json.loads(context)]


ALL_TITLES = ["The Midnight Sky", "Queen's Gambit", "Squid Game", "The Crown"]


class TestCatalogStore:
    """Tests for CatalogStore."""

    def test_default_catalog_has_four_titles(self, catalog):
        """Test the built-in catalog contents and order."""
        assert len(catalog) == 4
        assert [entry.title for entry in catalog] == ALL_TITLES

    def test_entries_are_immutable(self, catalog):
        """Test that catalog entries cannot be mutated."""
        entry = catalog.entries[0]
        with pytest.raises(ValidationError):
            entry.rating = 1.0  # type: ignore[misc]

    def test_to_json_uses_two_space_indent_and_field_order(self, catalog):
        """Test the serialized shape of a single entry."""
        text = catalog.to_json([catalog.entries[1]])

        assert text.startswith('[\n  {\n    "title": "Queen\'s Gambit",')
        data = json.loads(text)
        assert list(data[0]) == ["title", "year", "genre", "director", "rating", "summary"]
        assert data[0]["rating"] == 9.2

    def test_to_json_writes_whole_ratings_as_integers(self, catalog):
        """Test that a 7.0 rating is written as 7."""
        text = catalog.to_json([catalog.entries[0]])

        assert '"rating": 7,' in text
        assert json.loads(text)[0]["rating"] == 7

    def test_to_json_without_subset_serializes_everything(self, catalog):
        """Test that to_json() with no argument covers the whole catalog."""
        assert _titles(catalog.to_json()) == ALL_TITLES

    def test_from_json_file(self, tmp_path):
        """Test loading a catalog from a JSON file."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{
            "title": "Dark",
            "year": 2017,
            "genre": "Mystery",
            "director": "Baran bo Odar",
            "rating": 8.7,
            "summary": "Four families search for a missing boy.",
        }]))

        store = CatalogStore.from_json_file(path)

        assert [entry.title for entry in store] == ["Dark"]

    def test_from_json_file_rejects_bad_entries(self, tmp_path):
        """Test that malformed entries fail validation."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"title": "Dark"}]))

        with pytest.raises(ValidationError):
            CatalogStore.from_json_file(path)

    def test_rating_out_of_range_fails(self):
        """Test that ratings must lie within 0-10."""
        with pytest.raises(ValidationError):
            CatalogEntry(title="x", year=2000, genre="y", director="z", rating=11, summary="s")


class TestSelectContext:
    """Tests for the context selector priority rules."""

    def test_title_match_returns_only_that_entry(self, catalog):
        """Title matches short-circuit the keyword check ('about' is a keyword)."""
        context = select_context("what is queen's gambit about", catalog)

        assert _titles(context) == ["Queen's Gambit"]

    def test_title_match_is_case_insensitive(self, catalog):
        assert _titles(select_context("SQUID GAME rating?", catalog)) == ["Squid Game"]

    def test_multiple_title_matches_keep_catalog_order(self, catalog):
        context = select_context("compare the crown and the midnight sky", catalog)

        assert _titles(context) == ["The Midnight Sky", "The Crown"]

    def test_keyword_returns_full_catalog(self, catalog):
        assert _titles(select_context("recommend a drama", catalog)) == ALL_TITLES

    def test_genre_returns_full_catalog(self, catalog):
        """A full genre label in the query selects the whole catalog."""
        assert _titles(select_context("any good thriller, survival picks?", catalog)) == ALL_TITLES
        assert _titles(select_context("I like drama", catalog)) == ALL_TITLES

    def test_partial_genre_label_does_not_match(self, catalog):
        """Only complete genre labels count ('sci-fi' alone is not 'Sci-Fi, Drama')."""
        assert select_context("sci-fi", catalog) == ""

    def test_out_of_scope_returns_empty(self, catalog):
        assert select_context("what is the capital of France?", catalog) == ""

    def test_unknown_title_with_keyword_returns_full_catalog(self, catalog):
        """'about' is a keyword, so an unknown title still gets the full catalog."""
        assert _titles(select_context("tell me about Stranger Things", catalog)) == ALL_TITLES

    def test_unknown_title_without_keyword_returns_empty(self, catalog):
        assert select_context("Stranger Things season 5?", catalog) == ""

    @pytest.mark.parametrize("keyword", GENERAL_KEYWORDS)
    def test_each_keyword_selects_full_catalog(self, catalog, keyword):
        assert _titles(select_context(f"xx {keyword.upper()} yy", catalog)) == ALL_TITLES

    def test_helpers_agree_with_selector(self, catalog):
        assert [e.title for e in find_title_matches("the crown", catalog)] == ["The Crown"]
        assert is_general_query("show me everything", catalog)
        assert not is_general_query("hello", catalog)

    @given(st.text(max_size=80))
    def test_selector_is_pure(self, query):
        """Property test: identical input always gives identical output."""
        from reelchat.catalog import default_catalog

        store = default_catalog()
        assert select_context(query, store) == select_context(query, store)

    @given(st.sampled_from(ALL_TITLES), st.sampled_from(GENERAL_KEYWORDS), st.text(max_size=20))
    def test_title_match_never_returns_full_catalog(self, title, keyword, noise):
        """Property test: a named title wins over any keyword."""
        from reelchat.catalog import default_catalog

        store = default_catalog()
        query = f"{noise} {keyword} {title.swapcase()}"
        titles = _titles(select_context(query, store))

        assert title in titles
        assert len(titles) < len(store)
