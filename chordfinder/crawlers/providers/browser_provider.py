"""브라우저 렌더링 검색 provider (Playwright)

검색 URL로 이동 → DOM 로딩 + 잠깐 대기 → 동의창 닫기(best-effort)
→ 렌더링된 DOM에서 엔진별 결과 앵커의 href 수집.
"""

from __future__ import annotations

from typing import Optional

from playwright.async_api import Error as PlaywrightError

from chordfinder.core.config import settings
from chordfinder.core.exceptions import BrowserEnvironmentException, ProviderException
from chordfinder.core.logging import logger
from chordfinder.crawlers.playwright import BrowserPool, dismiss_consent, settle
from chordfinder.engine.result import Candidate

from .base import build_candidates
from .engines import SearchEngine


_COLLECT_HREFS_JS = "els => els.map(e => e.getAttribute('href') || '')"


class BrowserSearchProvider:
    """공유 BrowserPool의 격리된 페이지로 검색하는 provider"""

    def __init__(
        self,
        engine: SearchEngine,
        pool: BrowserPool,
        *,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.engine = engine
        self.name = engine.name
        self.pool = pool
        self.timeout_s = timeout_s or settings.browser_navigation_timeout_s

    async def fetch_candidates(self, query: str) -> list[Candidate]:
        try:
            return await self._search(query)
        except BrowserEnvironmentException:
            raise
        except ProviderException as e:
            logger.info(f"[PROVIDER:{self.name}:browser] {e.reason}")
            return []
        except PlaywrightError as e:
            logger.info(f"[PROVIDER:{self.name}:browser] Playwright error: {e}")
            return []
        except Exception as e:
            logger.warning(f"[PROVIDER:{self.name}:browser] Unexpected failure: {type(e).__name__}: {e}")
            return []

    async def _search(self, query: str) -> list[Candidate]:
        url = self.engine.build_search_url(query)
        async with self.pool.page(block_resources=True) as page:
            await page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_s * 1000)
            await settle(page)
            await dismiss_consent(page)
            hrefs = await page.eval_on_selector_all(self.engine.dom_selector, _COLLECT_HREFS_JS)

        candidates = build_candidates(hrefs or [], self.engine.decode, self.name)
        if not candidates:
            raise ProviderException(self.name, "no result links in rendered DOM")

        logger.info(f"[PROVIDER:{self.name}:browser] {len(candidates)} candidates")
        return candidates
