"""Pydantic models for catalog queries and results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from storesearch.domain.scopes import SearchScope


def _first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return None


class StoreItem(BaseModel):
    """A single catalog result; two items are the same item when their ids match."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    artist: str = ""
    kind: str = ""
    artwork_url: str | None = None
    description: str | None = None
    track_view_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_api_entry(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "id" in data:
            return data

        kind = data.get("kind")
        if not kind and data.get("collectionType"):
            kind = str(data["collectionType"]).lower()

        identifier = _first_present(data, "trackId", "collectionId", "artistId")
        return {
            "id": str(identifier) if identifier is not None else None,
            "name": _first_present(data, "trackName", "collectionName"),
            "artist": data.get("artistName") or "",
            "kind": kind or "",
            "artwork_url": _first_present(data, "artworkUrl100", "artworkUrl60", "artworkUrl30"),
            "description": _first_present(data, "description", "longDescription", "shortDescription"),
            "track_view_url": _first_present(data, "trackViewUrl", "collectionViewUrl"),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoreItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class SearchResponse(BaseModel):
    result_count: int | None = Field(default=None, alias="resultCount")
    results: list[StoreItem]


class SearchQuery(BaseModel):
    """One request against the catalog for a single scope."""

    model_config = ConfigDict(frozen=True)

    term: str = Field(min_length=1)
    scope: SearchScope
    lang: str = "en_us"
    limit: int = Field(default=20, ge=1)

    @field_validator("term", mode="before")
    @classmethod
    def _strip_term(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    def to_params(self) -> dict[str, str]:
        return {
            "term": self.term,
            "media": self.scope.media_type,
            "lang": self.lang,
            "limit": str(self.limit),
        }


__all__ = ["SearchQuery", "SearchResponse", "StoreItem"]
