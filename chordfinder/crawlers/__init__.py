"""Crawler modules (search providers + page fetchers, HTTP / Playwright).

공개 API는 이 파일에서만 export합니다.
"""

from .http_client import HttpResponse, SharedHttpClient, get_shared_http_client, shutdown_shared_http_client
from .content import BrowserContentFetcher, ContentFetcher, FetchedPage, HttpContentFetcher
from .providers import SearchProvider, build_search_providers

__all__ = [
        "HttpResponse",
        "SharedHttpClient",
        "get_shared_http_client",
        "shutdown_shared_http_client",
        "ContentFetcher",
        "FetchedPage",
        "HttpContentFetcher",
        "BrowserContentFetcher",
        "SearchProvider",
        "build_search_providers",
]
