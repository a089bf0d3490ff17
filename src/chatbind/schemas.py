"""Declared record schemas and their typed models.

Each target record is declared once as a `SchemaDescription`; the same
pipeline binds all of them. The pydantic models give callers typed access to
a bound record via ``ExtractionResult.to_model()``.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from chatbind.core.schema import FieldSpec, SchemaDescription
from chatbind.errors import ConfigurationError

MOVIE_DETAILS = SchemaDescription(
    name="movie_details",
    description="Key facts about a feature film.",
    fields=(
        FieldSpec.text("title", 100, description="Original release title"),
        FieldSpec.integer("year", description="Year of first release"),
        FieldSpec.text("director", 80, description="Director's full name"),
        FieldSpec.text_list("genres", 5, 30, description="Genres, most specific first"),
        FieldSpec.text_list("actors", 10, 60, description="Leading cast, billing order"),
    ),
)

RECIPE = SchemaDescription(
    name="recipe",
    description="A home-cookable recipe for a dish.",
    fields=(
        FieldSpec.text("title", 75, description="Name of the dish"),
        FieldSpec.text("totalTime", 30, description="Total time, e.g. '45 minutes'"),
        FieldSpec.text("countryOfOrigin", 50, description="Country the dish comes from"),
        FieldSpec.text_list("ingredients", 12, 80, description="Ingredients with quantities"),
        FieldSpec.text_list("steps", 10, 300, description="Preparation steps in order"),
    ),
)

_SCHEMAS: dict[str, SchemaDescription] = {
    schema.name: schema for schema in (MOVIE_DETAILS, RECIPE)
}


def get_schema(name: str) -> SchemaDescription:
    """Return the declared schema called ``name``."""
    try:
        return _SCHEMAS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown schema: {name!r}",
            hint="Known schemas: " + ", ".join(sorted(_SCHEMAS)),
        ) from None


def available_schemas() -> tuple[str, ...]:
    return tuple(sorted(_SCHEMAS))


# --- Typed records ---


class MovieDetails(BaseModel):
    """Typed view of a bound `MOVIE_DETAILS` record."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", max_length=100)
    year: int = 0
    director: str = Field(default="", max_length=80)
    genres: list[Annotated[str, Field(max_length=30)]] = Field(
        default_factory=list, max_length=5
    )
    actors: list[Annotated[str, Field(max_length=60)]] = Field(
        default_factory=list, max_length=10
    )


class Recipe(BaseModel):
    """Typed view of a bound `RECIPE` record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(default="", max_length=75)
    total_time: str = Field(default="", max_length=30, alias="totalTime")
    country_of_origin: str = Field(default="", max_length=50, alias="countryOfOrigin")
    ingredients: list[Annotated[str, Field(max_length=80)]] = Field(
        default_factory=list, max_length=12
    )
    steps: list[Annotated[str, Field(max_length=300)]] = Field(
        default_factory=list, max_length=10
    )
