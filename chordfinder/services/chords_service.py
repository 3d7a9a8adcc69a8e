"""코드 악보 서비스 - 해석(resolve) + 페이지 fetch + iframe 문서 생성

HTTP 레이어는 이 서비스에만 의존합니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chordfinder.core.config import settings
from chordfinder.core.logging import logger, sanitize_for_log
from chordfinder.crawlers.content import BrowserContentFetcher, ContentFetcher, HttpContentFetcher
from chordfinder.crawlers.http_client import SharedHttpClient
from chordfinder.crawlers.playwright import BrowserPool
from chordfinder.crawlers.providers import build_search_providers
from chordfinder.engine.orchestrator import ResolutionOrchestrator
from chordfinder.engine.result import ResolvedResult
from chordfinder.utils.html_sanitizer import embed


@dataclass(frozen=True)
class EmbeddedDocument:
    """iframe에 넣을 정리된 문서"""

    query: str
    source_url: str
    html: str
    via: str


class ChordsService:
    def __init__(self, orchestrator: ResolutionOrchestrator, fetcher: ContentFetcher):
        self.orchestrator = orchestrator
        self.fetcher = fetcher

    async def resolve(self, query: object) -> ResolvedResult:
        return await self.orchestrator.resolve(query)

    async def embedded(self, query: object) -> EmbeddedDocument:
        """
        검색어 → 정리된 HTML 문서

        Raises:
            InvalidQueryException: 검색어 없음
            NoResultFoundException: 후보 없음
            FetchException: 모든 후보 fetch 실패
            BrowserEnvironmentException: 브라우저 바이너리 없음
        """
        resolved = await self.orchestrator.resolve(query)
        page = await self.fetcher.fetch_page(resolved.top_candidates(settings.max_embed_candidates))

        logger.info(
            f"[EMBED] query='{sanitize_for_log(resolved.query)}', via={page.source}, "
            f"url={sanitize_for_log(page.url, 120)}, len={len(page.html)}"
        )
        return EmbeddedDocument(
            query=resolved.query,
            source_url=page.url,
            html=embed(page.html, page.url),
            via=page.source,
        )


def build_chords_service(
    mode: Optional[str] = None,
    *,
    client: Optional[SharedHttpClient] = None,
    pool: Optional[BrowserPool] = None,
) -> ChordsService:
    """배포 모드에 맞는 provider/fetcher 조합으로 서비스 구성"""
    mode = mode or settings.chords_fetch_mode
    providers = build_search_providers(
        mode,
        client=client,
        pool=pool,
        include_mirror=settings.mirror_enabled,
    )
    if mode == "browser":
        fetcher: ContentFetcher = BrowserContentFetcher(pool)
    else:
        fetcher = HttpContentFetcher(client)

    logger.info(f"[SERVICE] mode={mode}, providers={[p.name for p in providers]}")
    return ChordsService(ResolutionOrchestrator(providers), fetcher)
