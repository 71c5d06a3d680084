"""Movie catalog proxy for the TMDB API."""

import logging
from typing import Any

import httpx

from src.config import Settings
from src.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class CatalogService:
    """Forwards read-only catalog queries to TMDB and returns the JSON verbatim."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = settings.tmdb_base_url.rstrip("/")
        self.api_key = settings.tmdb_api_key
        self.language = settings.tmdb_language
        self.timeout = settings.tmdb_timeout_seconds
        self.transport = transport

    async def trending(self) -> Any:
        """Trending movies and shows of the week."""
        return await self._get("/trending/all/week", error_message="Failed to fetch trending")

    async def top_rated(self) -> Any:
        """Top rated movies."""
        return await self._get("/movie/top_rated", error_message="Failed to fetch top rated")

    async def by_genre(self, genre_id: int) -> Any:
        """Most popular movies in a genre."""
        return await self._get(
            "/discover/movie",
            params={"with_genres": genre_id, "sort_by": "popularity.desc"},
            error_message="Failed to fetch genre",
        )

    async def _get(
        self,
        path: str,
        error_message: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Call TMDB with the API key and locale added.

        Args:
            path: Path below the TMDB base URL
            error_message: Message for the UpstreamError raised on failure
            params: Extra query parameters

        Returns:
            The decoded JSON body
        """
        query = dict(params or {})
        query["api_key"] = self.api_key or ""
        query["language"] = self.language

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(f"{self.base_url}{path}", params=query)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"TMDB returned {e.response.status_code} for {path}")
            raise UpstreamError(error_message) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling TMDB {path}: {type(e).__name__}")
            raise UpstreamError(error_message) from e
        except ValueError as e:
            logger.error(f"TMDB returned invalid JSON for {path}: {e}")
            raise UpstreamError(error_message) from e
