"""API routes package."""

from .health_routes import router as health_router
from .chords_routes import router as chords_router, get_chords_service

__all__ = ["health_router", "chords_router", "get_chords_service"]
