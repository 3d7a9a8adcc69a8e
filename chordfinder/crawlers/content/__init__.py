"""Target page fetchers (HTTP + mirror / browser)."""

from .base import ContentFetcher, FetchedPage
from .browser_fetcher import BrowserContentFetcher
from .http_fetcher import HTML_CONTENT_TYPES, HttpContentFetcher

__all__ = [
    "ContentFetcher",
    "FetchedPage",
    "BrowserContentFetcher",
    "HttpContentFetcher",
    "HTML_CONTENT_TYPES",
]
