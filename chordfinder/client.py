"""Chords API 클라이언트 (httpx)

iframe 호스트 쪽에서 서버 상태 확인 → resolve → embedded 순으로 호출할 때 씁니다.
헬스 체크 결과는 짧게 캐시해서 폴링 부담을 줄입니다.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx

from chordfinder.core.config import settings
from chordfinder.core.exceptions import ChordFinderException, FetchException
from chordfinder.core.logging import logger, sanitize_for_log
from chordfinder.services.cache_service import TTLCache

_HEALTH_KEY = "health"


class ChordsApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        health_cache: Optional[TTLCache[bool]] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(base_url=self.base_url, transport=transport)
        if health_cache is None:
            health_cache = TTLCache(settings.health_cache_ttl_s, name="health_cache")
        self._health_cache = health_cache

    async def check_health(self) -> bool:
        """GET /api/health. 실패/타임아웃은 False (15초 캐시)"""
        cached = self._health_cache.get(_HEALTH_KEY)
        if cached is not None:
            return cached

        ok = False
        try:
            resp = await self._http.get(
                "/api/health",
                timeout=settings.health_timeout_s,
                headers={"Cache-Control": "no-store"},
            )
            ok = resp.status_code == 200 and bool(resp.json().get("ok"))
        except (httpx.HTTPError, ValueError) as e:
            logger.info(f"[CLIENT] Health check failed: {type(e).__name__}")

        self._health_cache.set(_HEALTH_KEY, ok)
        return ok

    async def resolve(self, query: str) -> str:
        """검색어 → 첫 번째 결과 URL

        Raises:
            ChordFinderException: 400/502 응답 (서버 오류 메시지 그대로)
        """
        resp = await self._http.get("/api/chords/resolve", params={"query": query})
        try:
            data = resp.json()
        except ValueError as e:
            # 프록시가 HTML 502 페이지를 돌려주는 경우
            raise ChordFinderException(
                message=f"Resolve failed with {resp.status_code}",
                error_code="RESOLVE_FAILED",
                details={"status": resp.status_code, "query": query},
            ) from e
        if resp.status_code != 200:
            raise ChordFinderException(
                message=str(data.get("error") or f"Resolve failed with {resp.status_code}"),
                error_code="RESOLVE_FAILED",
                details={"status": resp.status_code, "query": query},
            )
        return data["firstResultUrl"]

    async def embedded(self, query: str, timeout: Optional[float] = None) -> str:
        """검색어 → iframe용 HTML

        timeout이 지나면 요청을 취소하고 FetchException을 던집니다.
        """
        try:
            resp = await asyncio.wait_for(
                self._http.get("/api/chords/embedded", params={"query": query}, timeout=None),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.info(f"[CLIENT] Embedded request cancelled: query='{sanitize_for_log(query)}'")
            raise FetchException("Embedded request timed out", details={"timeout": timeout}) from e

        if resp.status_code != 200:
            raise FetchException(
                f"Embedded failed with {resp.status_code}",
                details={"status": resp.status_code, "html": resp.text},
            )
        return resp.text

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ChordsApiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
