"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from raid_codex.config import settings
from raid_codex.api.routes.champions import router as champions_router
from raid_codex.api.routes.clan_boss import router as clan_boss_router
from raid_codex.repositories.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).parents[3]


def get_data_dir() -> Path:
    """Snapshot directory from settings; relative paths resolve from the repo root."""
    data_dir = Path(settings.data_dir)
    if data_dir.is_absolute():
        return data_dir
    return REPO_ROOT / data_dir


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    if not hasattr(app.state, "repository"):
        data_dir = get_data_dir()
        logger.info(f"Serving catalog from {data_dir}")
        app.state.repository = CatalogRepository(data_dir)
    yield


app = FastAPI(
    title="Raid Codex",
    description="Raid: Shadow Legends champion catalog, build guides and Clan Boss tools",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "raid-codex"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Raid Codex API",
        "version": "0.1.0",
        "docs": "/docs",
    }


app.include_router(champions_router)
app.include_router(clan_boss_router)
