"""HTTP Content Fetcher (직접 GET → 텍스트 미러 폴백)

후보마다 직접 요청을 먼저 시도하고, 막히면 텍스트 미러를 시도한 뒤 다음 후보로 넘어갑니다.
"""

from __future__ import annotations

from typing import Optional, Sequence

from chordfinder.core.config import settings
from chordfinder.core.exceptions import FetchException
from chordfinder.core.logging import logger, sanitize_for_log
from chordfinder.crawlers.http_client import SharedHttpClient, get_shared_http_client
from chordfinder.crawlers.mirror import build_mirror_url, render_snapshot_html

from .base import FetchedPage


HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


class HttpContentFetcher:
    def __init__(
        self,
        client: Optional[SharedHttpClient] = None,
        *,
        mirror_enabled: Optional[bool] = None,
        max_candidates: Optional[int] = None,
    ) -> None:
        self.client = client or get_shared_http_client()
        self.mirror_enabled = settings.mirror_enabled if mirror_enabled is None else mirror_enabled
        self.max_candidates = max_candidates or settings.max_embed_candidates

    async def fetch_direct(self, url: str) -> str:
        """대상 사이트 직접 요청 (2xx/3xx + HTML Content-Type만 허용)"""
        logger.info(f"[FETCH] Direct {sanitize_for_log(url, 120)} (timeout={settings.page_timeout_s:.1f}s)")
        res = await self.client.get(
            url,
            timeout_s=settings.page_timeout_s,
            max_redirects=settings.page_max_redirects,
        )
        if res is None:
            raise FetchException("Target site could not be reached", url=url)
        if not (200 <= res.status < 400):
            raise FetchException(f"Target site returned {res.status}", url=url, details={"status": res.status})

        content_type = res.content_type
        if not any(t in content_type for t in HTML_CONTENT_TYPES):
            raise FetchException(
                f"Unsupported target content type: {content_type or 'unknown'}",
                url=url,
                details={"content_type": content_type},
            )
        return res.text

    async def fetch_via_mirror(self, url: str) -> str:
        """텍스트 미러로 받아 스냅샷 HTML로 감쌈"""
        mirror_url = build_mirror_url(url)
        logger.info(f"[FETCH] Mirror {sanitize_for_log(mirror_url, 120)}")
        res = await self.client.get(mirror_url, timeout_s=settings.mirror_page_timeout_s)
        if res is None:
            raise FetchException("Mirror could not be reached", url=url)
        if not res.ok:
            raise FetchException(f"Mirror failed with {res.status}", url=url, details={"status": res.status})
        return render_snapshot_html(res.text, url)

    async def _fetch_one(self, url: str) -> FetchedPage:
        try:
            return FetchedPage(url=url, html=await self.fetch_direct(url), source="direct")
        except FetchException as direct_error:
            logger.info(f"[FETCH] Direct failed: {direct_error.message}")
            if not self.mirror_enabled:
                raise
            try:
                return FetchedPage(url=url, html=await self.fetch_via_mirror(url), source="mirror")
            except FetchException as mirror_error:
                logger.info(f"[FETCH] Mirror failed: {mirror_error.message}")
                raise FetchException(
                    f"{direct_error.message}; {mirror_error.message}",
                    url=url,
                    details={"direct": direct_error.message, "mirror": mirror_error.message},
                ) from mirror_error

    async def fetch_document(self, url: str) -> str:
        return (await self._fetch_one(url)).html

    async def fetch_page(self, urls: Sequence[str]) -> FetchedPage:
        last_error: Optional[FetchException] = None
        for url in list(urls)[: self.max_candidates]:
            try:
                page = await self._fetch_one(url)
                logger.info(f"[FETCH] Loaded via {page.source}: {sanitize_for_log(url, 120)}")
                return page
            except FetchException as e:
                last_error = e
                continue

        if last_error is not None:
            raise last_error
        raise FetchException("Could not load any top result")
