"""API routers for different resource types."""

from pitchgrid.api.routers.matches import router as matches_router

__all__ = ["matches_router"]
