"""API 응답 스키마"""

from .chords_schema import ErrorResponse, HealthResponse, ResolveErrorResponse, ResolveResponse

__all__ = ["HealthResponse", "ResolveResponse", "ErrorResponse", "ResolveErrorResponse"]
