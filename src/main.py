"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import auth, movies
from src.config import get_settings
from src.database import init_db
from src.exceptions import register_exception_handlers

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# httpx logs full request URLs at INFO, and TMDB URLs carry the api_key
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    if settings.is_development:
        # Production schema is managed by Alembic
        init_db()
    if not settings.tmdb_api_key:
        logger.warning("TMDB_API_KEY is not set, movie endpoints will fail")
    logger.info(f"ArrowFlix API starting ({settings.environment})")
    yield


app = FastAPI(
    title="ArrowFlix API",
    description="Movie browsing backend with email/password accounts and a TMDB proxy",
    version="0.1.0",
    lifespan=lifespan,
)

# Any origin, with credentials, for the single-page front end
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(movies.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
