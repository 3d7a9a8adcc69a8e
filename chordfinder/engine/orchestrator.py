"""Resolution Orchestrator - Main Engine Entry Point

Coordinates the resolution pipeline:
1. Query validation / normalization
2. Cache lookup
3. Providers in fixed priority order (first acceptable candidate wins)
4. Cache store
"""

from __future__ import annotations

from typing import Optional, Sequence

from chordfinder.core.config import settings
from chordfinder.core.exceptions import InvalidQueryException, NoResultFoundException
from chordfinder.core.logging import logger, sanitize_for_log
from chordfinder.services.cache_service import TTLCache
from chordfinder.utils.text_utils import build_cache_key, normalize_query, tokenize_query

from .result import Candidate, ResolvedResult
from .scoring import rank_candidates


class ResolutionOrchestrator:
    """검색 해석 오케스트레이터

    Cache → Google → Bing → DuckDuckGo → 텍스트 미러 순서로 실행하며,
    수용 가능한 후보가 나오는 즉시 멈춥니다 (전체 최적보다 지연 시간 상한 우선).
    """

    def __init__(
        self,
        providers: Sequence,
        cache: Optional[TTLCache[ResolvedResult]] = None,
    ):
        """
        Args:
            providers: SearchProvider 목록 (우선순위 순)
            cache: 해석 결과 캐시 (기본: 5분 TTL)
        """
        if not providers:
            raise ValueError("providers must not be empty")

        self.providers = list(providers)
        if cache is None:
            cache = TTLCache(settings.resolve_cache_ttl_s, name="resolve_cache")
        self.cache: TTLCache[ResolvedResult] = cache

    async def resolve(self, raw_query: object) -> ResolvedResult:
        """검색어 → 최상위 후보 URL

        Raises:
            InvalidQueryException: 검색어가 비었을 때
            NoResultFoundException: 모든 provider가 수용 가능한 후보를 못 찾았을 때
        """
        query = normalize_query(raw_query)
        if not query:
            raise InvalidQueryException("Missing query")

        key = build_cache_key(query)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Resolve served from cache: query='{sanitize_for_log(query)}'")
            return cached

        logger.info(f"Resolve started: query='{sanitize_for_log(query)}'")
        tokens = tokenize_query(query)
        seen: list[Candidate] = []

        for provider in self.providers:
            found = await provider.fetch_candidates(query)
            if not found:
                logger.debug(f"Provider '{provider.name}' returned no candidates")
                continue

            seen.extend(found)
            acceptable = [s for s in rank_candidates(seen, tokens) if s.is_acceptable]
            if not acceptable:
                logger.info(f"Provider '{provider.name}' yielded only unacceptable candidates")
                continue

            best = acceptable[0]
            result = ResolvedResult(
                query=query,
                chosen_url=best.url,
                candidates=tuple(s.url for s in acceptable),
                provider=best.candidate.provider,
            )
            self.cache.set(key, result)
            logger.info(
                f"Resolve completed: query='{sanitize_for_log(query)}', provider={result.provider}, "
                f"score={best.score}, url={sanitize_for_log(best.url, 120)}"
            )
            return result

        logger.warning(f"No acceptable result: query='{sanitize_for_log(query)}'")
        raise NoResultFoundException(query)
