"""예외 계층 테스트"""
from chordfinder.core.exceptions import (
    BrowserEnvironmentException,
    BrowserException,
    ChordFinderException,
    FetchException,
    InvalidQueryException,
    NoResultFoundException,
    ProviderException,
)


def test_str_includes_error_code():
    assert str(FetchException("Target site returned 503")) == "[FETCH_ERROR] Target site returned 503"


def test_invalid_query():
    exc = InvalidQueryException()
    assert exc.reason == "Missing query"
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details["field"] == "query"


def test_no_result():
    exc = NoResultFoundException("adele hello")
    assert exc.message == "Could not resolve first search result"
    assert exc.details == {"query": "adele hello"}


def test_provider_exception_keeps_reason():
    exc = ProviderException("bing", "non-2xx status 429")
    assert exc.provider == "bing"
    assert "429" in exc.message


def test_browser_environment_is_browser_error():
    exc = BrowserEnvironmentException("Executable doesn't exist")
    assert isinstance(exc, BrowserException)
    assert isinstance(exc, ChordFinderException)
    assert exc.error_code == "BROWSER_ENVIRONMENT"
    assert "playwright install" in exc.remediation
