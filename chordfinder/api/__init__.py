"""API 엔드포인트 패키지 - export only."""

from .routes import health_router, chords_router, get_chords_service

__all__ = ["health_router", "chords_router", "get_chords_service"]
