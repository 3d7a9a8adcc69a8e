"""공유 HTTP 클라이언트 (curl_cffi)

- 요청마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커지므로
  프로세스 단위로 세션을 재사용합니다.
- 검색 엔진/대상 페이지/텍스트 미러 요청이 모두 이 클라이언트를 씁니다.
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional, Dict

from curl_cffi.requests import AsyncSession

from chordfinder.core.config import settings
from chordfinder.core.logging import logger, sanitize_for_log


@dataclass
class HttpResponse:
    """GET 결과 (상태 코드/본문/헤더만 보관)"""

    status: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def content_type(self) -> str:
        return (self.headers.get("content-type") or "").lower()

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class SharedHttpClient:
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=settings.crawler_http_impersonate,
                headers=self.default_headers(),
                allow_redirects=True,
                max_clients=int(getattr(settings, "crawler_http_max_clients", 20)),
                trust_env=False,
            )
            return self._session

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": settings.crawler_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": settings.crawler_accept_language,
        }

    async def get(
        self,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
        max_redirects: int = 5,
    ) -> Optional[HttpResponse]:
        """GET 요청. 네트워크 오류/타임아웃이면 None (상태 코드는 판단하지 않음)"""
        sess = await self._ensure_session()
        try:
            resp = await sess.get(
                url,
                headers=headers,
                timeout=timeout_s,
                allow_redirects=max_redirects > 0,
                max_redirects=max_redirects,
            )
            status = getattr(resp, "status_code", 0) or 0
            text = getattr(resp, "text", "") or ""
            raw_headers = getattr(resp, "headers", None) or {}
            resp_headers = {str(k).lower(): str(v) for k, v in raw_headers.items()}
            return HttpResponse(
                status=status,
                text=text,
                headers=resp_headers,
                url=str(getattr(resp, "url", "") or url),
            )
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] GET failed ({sanitize_for_log(url, 80)}): {type(e).__name__}: {repr(e)}")
            return None

    async def get_text(
        self,
        url: str,
        *,
        timeout_s: float,
        headers: Optional[Dict[str, str]] = None,
    ) -> Optional[tuple[int, str]]:
        res = await self.get(url, timeout_s=timeout_s, headers=headers)
        if res is None:
            return None
        return res.status, res.text

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception:
                pass
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
