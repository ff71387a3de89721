"""FastAPI application for the pitchgrid match simulator."""

import uvicorn
from fastapi import FastAPI

from pitchgrid import __version__
from pitchgrid.api.routers import matches_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="pitchgrid API",
        description="Sharded football match simulator",
        version=__version__,
    )
    app.include_router(matches_router, prefix="/api/v1")
    return app


# Create app instance
app = create_app()


@app.get("/")
async def root() -> dict:
    """Root endpoint - API info."""
    return {
        "name": "pitchgrid API",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    from pitchgrid.api.services import match_service

    return {"status": "healthy", "stored_matches": len(match_service.list_matches())}


def run_api(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the API server."""
    uvicorn.run("pitchgrid.api.main:app", host=host, port=port, reload=reload)
