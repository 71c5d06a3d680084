"""Tests for the TMDB catalog proxy."""

import logging

import httpx
import pytest

from src.api.dependencies import get_catalog_service
from src.config import Settings
from src.exceptions import UpstreamError
from src.main import app
from src.services.catalog import CatalogService

PAGE = {"page": 1, "results": [{"id": 550, "title": "Fight Club"}], "total_pages": 1}


@pytest.fixture
def catalog_settings():
    return Settings(tmdb_api_key="tmdb-key", tmdb_base_url="https://tmdb.test/3")


def make_service(settings, handler):
    return CatalogService(settings, transport=httpx.MockTransport(handler))


class TestCatalogService:
    """Tests for CatalogService."""

    @pytest.mark.asyncio
    async def test_trending(self, catalog_settings):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=PAGE)

        result = await make_service(catalog_settings, handler).trending()

        assert result == PAGE
        assert requests[0].url.path == "/3/trending/all/week"
        assert requests[0].url.params["api_key"] == "tmdb-key"
        assert requests[0].url.params["language"] == "en-US"

    @pytest.mark.asyncio
    async def test_top_rated(self, catalog_settings):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=PAGE)

        assert await make_service(catalog_settings, handler).top_rated() == PAGE
        assert requests[0].url.path == "/3/movie/top_rated"

    @pytest.mark.asyncio
    async def test_by_genre(self, catalog_settings):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=PAGE)

        assert await make_service(catalog_settings, handler).by_genre(28) == PAGE
        params = requests[0].url.params
        assert requests[0].url.path == "/3/discover/movie"
        assert params["with_genres"] == "28"
        assert params["sort_by"] == "popularity.desc"
        assert params["api_key"] == "tmdb-key"

    @pytest.mark.asyncio
    async def test_upstream_error_status(self, catalog_settings):
        def handler(request):
            return httpx.Response(401, json={"status_message": "Invalid API key"})

        with pytest.raises(UpstreamError) as exc_info:
            await make_service(catalog_settings, handler).trending()
        assert exc_info.value.message == "Failed to fetch trending"

    @pytest.mark.asyncio
    async def test_network_error(self, catalog_settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamError) as exc_info:
            await make_service(catalog_settings, handler).top_rated()
        assert exc_info.value.message == "Failed to fetch top rated"

    @pytest.mark.asyncio
    async def test_invalid_json(self, catalog_settings):
        def handler(request):
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(UpstreamError) as exc_info:
            await make_service(catalog_settings, handler).by_genre(35)
        assert exc_info.value.message == "Failed to fetch genre"


    @pytest.mark.asyncio
    async def test_api_key_never_logged(self, caplog):
        settings = Settings(tmdb_api_key="SECRET-TMDB-KEY", tmdb_base_url="https://tmdb.test/3")
        caplog.set_level(logging.DEBUG)

        def ok(request):
            return httpx.Response(200, json=PAGE)

        def failing(request):
            return httpx.Response(500, json={})

        await make_service(settings, ok).trending()
        with pytest.raises(UpstreamError):
            await make_service(settings, failing).top_rated()

        assert caplog.records
        assert not [r for r in caplog.records if "SECRET-TMDB-KEY" in r.getMessage()]


class TestMovieEndpoints:
    """Tests for the /api/movies routes."""

    @pytest.fixture
    def upstream(self, client, catalog_settings):
        """Route catalog calls to a fake TMDB and record the requests."""
        state = {"status": 200, "requests": []}

        def handler(request):
            state["requests"].append(request)
            return httpx.Response(state["status"], json=PAGE)

        app.dependency_overrides[get_catalog_service] = lambda: make_service(
            catalog_settings, handler
        )
        return state

    def test_trending(self, client, upstream):
        response = client.get("/api/movies/trending")
        assert response.status_code == 200
        assert response.json() == PAGE

    def test_top_rated(self, client, upstream):
        response = client.get("/api/movies/top-rated")
        assert response.status_code == 200
        assert response.json() == PAGE

    def test_genre(self, client, upstream):
        response = client.get("/api/movies/genre/28")
        assert response.status_code == 200
        assert upstream["requests"][0].url.params["with_genres"] == "28"

    def test_genre_requires_numeric_id(self, client, upstream):
        response = client.get("/api/movies/genre/action")
        assert response.status_code == 400
        assert upstream["requests"] == []

    def test_upstream_failure(self, client, upstream):
        upstream["status"] = 503

        response = client.get("/api/movies/genre/28")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch genre"}
