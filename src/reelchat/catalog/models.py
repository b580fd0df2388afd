"""Data models for the title catalog."""

from pydantic import BaseModel, ConfigDict, Field


class CatalogEntry(BaseModel):
    """A single title in the catalog."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Display title, matched case-insensitively against queries")
    year: int = Field(description="Release year")
    genre: str = Field(description="Comma-separated genre label, e.g. 'Sci-Fi, Drama'")
    director: str = Field(description="Director or showrunner")
    rating: float = Field(ge=0.0, le=10.0, description="Audience rating out of 10")
    summary: str = Field(description="One-paragraph synopsis")
