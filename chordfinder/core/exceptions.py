"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


class ChordFinderException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 유효성 검증
class ValidationException(ChordFinderException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """유효하지 않은 검색어 (비어 있음/공백만)"""
    def __init__(self, reason: str = "Missing query", details: Optional[dict[str, Any]] = None):
        super().__init__("query", reason, details)
        self.reason = reason


# 검색/해석 관련
class ProviderException(ChordFinderException):
    """단일 검색 엔진 호출 실패.

    어댑터 내부에서만 발생하고 어댑터 경계에서 잡혀 "후보 없음"으로 바뀝니다.
    """
    def __init__(self, provider: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Provider '{provider}' failed: {reason}"
        super().__init__(message, "PROVIDER_ERROR",
                        details or {"provider": provider, "reason": reason})
        self.provider = provider
        self.reason = reason


class NoResultFoundException(ChordFinderException):
    """모든 검색 엔진이 쓸 만한 후보를 내지 못함"""
    def __init__(self, query: str, details: Optional[dict[str, Any]] = None):
        super().__init__("Could not resolve first search result", "NO_RESULT_FOUND",
                        details or {"query": query})
        self.query = query


# 페이지 fetch 관련
class FetchException(ChordFinderException):
    """대상 페이지 fetch 실패 (상태 코드/Content-Type/네트워크)"""
    def __init__(self, message: str, url: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "FETCH_ERROR", details or {"url": url})
        self.url = url


# 브라우저 관련
class BrowserException(ChordFinderException):
    """브라우저 실행 오류"""
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "BROWSER_ERROR", details)


class BrowserEnvironmentException(BrowserException):
    """Playwright 브라우저 바이너리가 설치되지 않은 경우"""

    remediation = "Run `playwright install chromium` on the server and restart it."

    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__(f"Headless browser is not available: {reason}", details or {"reason": reason})
        self.error_code = "BROWSER_ENVIRONMENT"
