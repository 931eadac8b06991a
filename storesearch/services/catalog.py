"""iTunes Search API client: result queries and artwork downloads."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO

import httpx
from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError

from storesearch.config import CatalogSettings
from storesearch.domain.models import SearchQuery, SearchResponse, StoreItem
from storesearch.logging import logger
from storesearch.services.exceptions import AssetMissing, DecodeFailure, ItemsNotFound


@dataclass(slots=True)
class Artwork:
    url: str
    data: bytes
    format: str | None
    width: int
    height: int


class CatalogClient:
    """Executes single-scope searches and artwork fetches.

    Cancellation of the awaiting task propagates as ``asyncio.CancelledError``
    untouched, so callers can tell it apart from a failed request.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: CatalogSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or CatalogSettings()

    async def search(self, query: SearchQuery) -> list[StoreItem]:
        try:
            response = await self._client.get(
                str(self._settings.search_url),
                params=query.to_params(),
                headers={"User-Agent": self._settings.user_agent},
                timeout=self._settings.request_timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise ItemsNotFound(f"Catalog request failed: {exc}") from exc

        if response.status_code != 200:
            raise ItemsNotFound(
                f"Catalog search failed ({response.status_code}) for media={query.scope.media_type}"
            )

        logger.debug(
            "catalog_payload_received",
            media=query.scope.media_type,
            term=query.term,
            bytes=len(response.content),
        )
        try:
            payload = SearchResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeFailure(
                f"Malformed catalog payload for media={query.scope.media_type}: "
                f"{exc.error_count()} error(s)"
            ) from exc

        logger.info(
            "catalog_search_completed",
            media=query.scope.media_type,
            term=query.term,
            count=len(payload.results),
        )
        return payload.results

    async def fetch_asset(self, url: str) -> Artwork:
        try:
            response = await self._client.get(
                url,
                headers={"User-Agent": self._settings.user_agent},
                timeout=self._settings.request_timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise AssetMissing(f"Artwork request failed: {exc}") from exc

        if response.status_code != 200:
            raise AssetMissing(f"Artwork fetch failed ({response.status_code}): {url}")

        data = response.content
        try:
            with Image.open(BytesIO(data)) as image:
                image_format = image.format
                width, height = image.size
                image.verify()
        except (
            Image.DecompressionBombError,
            UnidentifiedImageError,
            OSError,
            SyntaxError,
            ValueError,
        ) as exc:
            raise AssetMissing(f"Artwork is not a decodable image: {url}") from exc

        return Artwork(url=url, data=data, format=image_format, width=width, height=height)


__all__ = ["Artwork", "CatalogClient"]
