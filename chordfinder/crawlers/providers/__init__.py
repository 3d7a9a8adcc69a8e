"""Search provider adapters (HTTP / browser / text mirror)."""

from __future__ import annotations

from typing import Optional

from chordfinder.crawlers.http_client import SharedHttpClient
from chordfinder.crawlers.playwright import BrowserPool

from .base import SearchProvider, build_candidates
from .browser_provider import BrowserSearchProvider
from .engines import BING, DEFAULT_ENGINES, DUCKDUCKGO, GOOGLE, SearchEngine
from .http_provider import HttpSearchProvider
from .mirror_provider import MirrorSearchProvider


def build_search_providers(
    mode: str,
    *,
    client: Optional[SharedHttpClient] = None,
    pool: Optional[BrowserPool] = None,
    include_mirror: bool = True,
) -> list[SearchProvider]:
    """배포 모드별 provider 목록 (고정 우선순위, 텍스트 미러는 항상 마지막)"""
    providers: list[SearchProvider] = []
    if mode == "browser":
        if pool is None:
            raise ValueError("browser mode requires a BrowserPool")
        providers.extend(BrowserSearchProvider(engine, pool) for engine in DEFAULT_ENGINES)
    elif mode == "http":
        providers.extend(HttpSearchProvider(engine, client) for engine in DEFAULT_ENGINES)
    else:
        raise ValueError(f"Unsupported fetch mode: {mode}")

    if include_mirror:
        providers.append(MirrorSearchProvider(client))
    return providers


__all__ = [
    "SearchProvider",
    "SearchEngine",
    "GOOGLE",
    "BING",
    "DUCKDUCKGO",
    "DEFAULT_ENGINES",
    "HttpSearchProvider",
    "BrowserSearchProvider",
    "MirrorSearchProvider",
    "build_candidates",
    "build_search_providers",
]
