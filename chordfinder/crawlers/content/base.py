"""Content Fetcher Protocol

대상 페이지 HTML을 가져오는 전략(HTTP 직접 + 미러 / 브라우저 렌더링)의 공통 인터페이스.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class FetchedPage:
    """fetch 성공 결과

    Attributes:
        url: 실제로 가져온 후보 URL (base/배너에 쓰임)
        html: 페이지 HTML (미러인 경우 텍스트 스냅샷 문서)
        source: "direct" | "mirror" | "browser"
    """

    url: str
    html: str
    source: str


class ContentFetcher(Protocol):
    async def fetch_document(self, url: str) -> str:
        """단일 URL의 HTML

        Raises:
            FetchException: 모든 전략 실패
        """
        ...

    async def fetch_page(self, urls: Sequence[str]) -> FetchedPage:
        """순위가 매겨진 후보 목록에서 처음 성공한 페이지

        Raises:
            FetchException: 모든 후보/전략 실패 (마지막 오류 메시지 유지)
        """
        ...
