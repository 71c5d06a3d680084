"""Movie catalog endpoints proxied to TMDB."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from src.api.dependencies import get_catalog_service
from src.schemas.auth import MessageResponse
from src.services.catalog import CatalogService

router = APIRouter(
    prefix="/api/movies",
    tags=["movies"],
    responses={500: {"model": MessageResponse}},
)


@router.get("/trending")
async def get_trending(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Any:
    """Trending titles of the week."""
    return await catalog.trending()


@router.get("/top-rated")
async def get_top_rated(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Any:
    """Top rated movies."""
    return await catalog.top_rated()


@router.get("/genre/{genre_id}")
async def get_genre(
    genre_id: int,
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Any:
    """Popular movies for a TMDB genre id."""
    return await catalog.by_genre(genre_id)
