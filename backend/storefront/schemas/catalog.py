"""Catalog Schemas — picker view-model and sync summary.

Design Decisions:
    - Field names follow the view templates (pokemons, searchQuery) so the
      rendering layer consumes the JSON unchanged
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CatalogEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image: str = Field(validation_alias=AliasChoices("image_url", "image"))


class CatalogView(BaseModel):
    """Picker view-model."""
    pokemons: list[CatalogEntryResponse]
    searchQuery: str = ""


class SyncResponse(BaseModel):
    status: str = "ok"
    fetched: int
    inserted: int
    updated: int
