"""텍스트 미러 검색 provider (마지막 폴백)

Google 검색 결과 페이지를 텍스트 미러로 받아 markdown 링크를 추출합니다.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from chordfinder.core.config import settings
from chordfinder.core.exceptions import ProviderException
from chordfinder.core.logging import logger
from chordfinder.crawlers.http_client import SharedHttpClient, get_shared_http_client
from chordfinder.crawlers.mirror import build_mirror_url, extract_links_from_markdown
from chordfinder.engine.result import Candidate

from .base import build_candidates


class MirrorSearchProvider:
    name = "mirror"

    def __init__(
        self,
        client: Optional[SharedHttpClient] = None,
        *,
        timeout_s: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> None:
        self.client = client or get_shared_http_client()
        self.timeout_s = timeout_s or settings.mirror_search_timeout_s
        self.limit = limit or settings.mirror_search_limit

    def build_url(self, query: str) -> str:
        return build_mirror_url(f"http://www.google.com/search?q={quote(query, safe='')}")

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
        res = await self.client.get_text(self.build_url(query), timeout_s=self.timeout_s)
        if res is None:
            raise ProviderException(self.name, "network error or timeout")
        status, markdown = res
        if not (200 <= status < 300):
            raise ProviderException(self.name, f"non-2xx status {status}")

        links = extract_links_from_markdown(markdown, limit=self.limit)
        candidates = build_candidates(links, lambda u: u, self.name, limit=self.limit)
        if not candidates:
            raise ProviderException(self.name, "no links in mirror output")

        logger.info(f"[PROVIDER:{self.name}] {len(candidates)} candidates")
        return candidates
