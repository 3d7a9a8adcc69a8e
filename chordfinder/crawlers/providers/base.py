"""Search Provider Protocol - Interface for search engine adapters

모든 검색 provider(HTTP/브라우저/텍스트 미러)가 구현하는 공통 인터페이스입니다.
"""

from __future__ import annotations

from typing import Callable, Iterable, Protocol

from chordfinder.engine.result import Candidate
from chordfinder.utils.url_utils import is_http_url, normalize_url


class SearchProvider(Protocol):
    """검색 provider 프로토콜

    구현 예시:
        class HttpSearchProvider:
            name = "google"

            async def fetch_candidates(self, query: str) -> list[Candidate]:
                # 검색 페이지 요청 → 결과 링크 추출 → 디코딩
                ...
    """

    name: str

    async def fetch_candidates(self, query: str) -> list[Candidate]:
        """검색 실행

        Args:
            query: 검색어 (trim 완료)

        Returns:
            list[Candidate]: 결과 순서대로의 후보. 실패 시 빈 리스트 (예외 없음)

        Raises:
            BrowserEnvironmentException: 브라우저 바이너리가 없는 경우만
        """
        ...


def build_candidates(
    hrefs: Iterable[str],
    decoder: Callable[[str], str],
    provider: str,
    *,
    limit: int = 10,
) -> list[Candidate]:
    """원본 href 목록 → 디코딩/중복 제거된 Candidate 목록"""
    out: list[Candidate] = []
    seen: set[str] = set()
    for href in hrefs:
        url = decoder(href or "")
        if not is_http_url(url):
            continue
        key = normalize_url(url)
        if key in seen:
            continue
        seen.add(key)
        out.append(Candidate(url=url, provider=provider, position=len(out)))
        if len(out) >= limit:
            break
    return out
