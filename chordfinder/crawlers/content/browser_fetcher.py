"""브라우저 렌더링 Content Fetcher (Playwright)

해석된 URL 하나만 시도합니다. 실패하면 다음 후보로 넘어가지 않습니다.
"""

from __future__ import annotations

from typing import Optional, Sequence

from playwright.async_api import Error as PlaywrightError

from chordfinder.core.config import settings
from chordfinder.core.exceptions import FetchException
from chordfinder.core.logging import logger, sanitize_for_log
from chordfinder.crawlers.playwright import BrowserPool, settle

from .base import FetchedPage


class BrowserContentFetcher:
    def __init__(self, pool: BrowserPool, *, timeout_s: Optional[float] = None) -> None:
        self.pool = pool
        self.timeout_s = timeout_s or settings.browser_navigation_timeout_s

    async def fetch_document(self, url: str) -> str:
        logger.info(f"[FETCH] Browser {sanitize_for_log(url, 120)} (timeout={self.timeout_s:.1f}s)")
        try:
            async with self.pool.page() as page:
                response = await page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_s * 1000)
                if response is not None and response.status >= 400:
                    raise FetchException(f"Target site returned {response.status}", url=url)
                await settle(page)
                return await page.content()
        except PlaywrightError as e:
            raise FetchException(f"Browser navigation failed: {str(e).splitlines()[0] if str(e) else type(e).__name__}", url=url) from e

    async def fetch_page(self, urls: Sequence[str]) -> FetchedPage:
        if not urls:
            raise FetchException("Could not load any top result")
        url = urls[0]
        return FetchedPage(url=url, html=await self.fetch_document(url), source="browser")
