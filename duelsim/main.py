"""Duelsim - FastAPI Backend.

Headless duel resolution for tactical shooter balance simulation.
"""

import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI

from .config import get_settings
from .api import api_router
from .services.catalog import DefinitionCatalog

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    catalog = DefinitionCatalog.summary()
    logger.info(
        f"Starting {settings.app_name} (engine={settings.duel_engine}, "
        f"samples={settings.ttk_samples}, {len(catalog['weapons'])} weapons, "
        f"{len(catalog['agents'])} agents, {len(catalog['maps'])} maps)"
    )

    yield

    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="""
    Duelsim API - duel resolution engine for tactical shooter balance.

    Features:
    - Analytic Monte Carlo time-to-kill estimation
    - Raycast duels against wall geometry and smoke
    - Two-way duel composition with simultaneous-kill detection
    - Seeded, reproducible matchup sweeps
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Include API routes
app.include_router(api_router, prefix=f"/api/{settings.api_version}")


@app.get("/")
async def root():
    """Root endpoint - API info."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# For running with uvicorn directly
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "duelsim.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 8000)),
        reload=True,
    )
