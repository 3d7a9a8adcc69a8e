"""HTTP 검색 provider (curl_cffi + selectolax)

- 네트워크(fetch)와 파싱(engines.py)을 분리해 테스트 포인트를 명확히 합니다.
- 어떤 실패든 어댑터 안에서 잡아 빈 리스트로 바꿉니다.
"""

from __future__ import annotations

from typing import Optional

from chordfinder.core.config import settings
from chordfinder.core.exceptions import ProviderException
from chordfinder.core.logging import logger, sanitize_for_log
from chordfinder.crawlers.http_client import SharedHttpClient, get_shared_http_client
from chordfinder.engine.result import Candidate

from .base import build_candidates
from .engines import SearchEngine


class HttpSearchProvider:
    """검색 엔진 결과 페이지를 직접 GET해서 파싱하는 provider"""

    def __init__(
        self,
        engine: SearchEngine,
        client: Optional[SharedHttpClient] = None,
        *,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.engine = engine
        self.name = engine.name
        self.client = client or get_shared_http_client()
        self.timeout_s = timeout_s or settings.provider_timeout_s

    async def fetch_candidates(self, query: str) -> list[Candidate]:
        try:
            return await self._search(query)
        except ProviderException as e:
            logger.info(f"[PROVIDER:{self.name}] {e.reason}")
            return []
        except Exception as e:
            logger.warning(f"[PROVIDER:{self.name}] Unexpected failure: {type(e).__name__}: {e}")
            return []

    async def _search(self, query: str) -> list[Candidate]:
        url = self.engine.build_search_url(query)
        logger.info(f"[PROVIDER:{self.name}] Fetching {sanitize_for_log(url, 120)} (timeout={self.timeout_s:.1f}s)")

        res = await self.client.get_text(url, timeout_s=self.timeout_s)
        if res is None:
            raise ProviderException(self.name, "network error or timeout")
        status, html = res
        if not (200 <= status < 300):
            raise ProviderException(self.name, f"non-2xx status {status}")

        hrefs = self.engine.extract_hrefs(html)
        candidates = build_candidates(hrefs, self.engine.decode, self.name)
        if not candidates:
            raise ProviderException(self.name, f"no result links (raw anchors={len(hrefs)}, len={len(html)})")

        logger.info(f"[PROVIDER:{self.name}] {len(candidates)} candidates")
        return candidates
