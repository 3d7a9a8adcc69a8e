"""Resolution Result - Standardized candidate/result format

검색 엔진 후보, 점수가 매겨진 후보, 최종 해석 결과를 정의합니다.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


# 이 값보다 큰 점수만 "수용 가능"
ACCEPTABLE_SCORE_FLOOR = -1000


@dataclass(frozen=True)
class Candidate:
    """검색 엔진이 찾은 후보 링크

    Attributes:
        url: 디코딩된 절대 http(s) URL
        provider: 후보를 찾은 provider 이름 ("google" | "bing" | ...)
        position: provider 결과 목록 안에서의 순서 (0부터)
    """

    url: str
    provider: str
    position: int = 0


@dataclass(frozen=True)
class ScoredCandidate:
    """점수가 매겨진 후보

    Attributes:
        candidate: 원본 후보
        score: 점수 (수용 불가 후보는 -10000)
        index: 전체 발견 순서 (동점 시 안정 정렬용)
    """

    candidate: Candidate
    score: int
    index: int

    @property
    def url(self) -> str:
        return self.candidate.url

    @property
    def is_acceptable(self) -> bool:
        return self.score > ACCEPTABLE_SCORE_FLOOR


@dataclass(frozen=True)
class ResolvedResult:
    """해석 완료 결과 (캐시에 그대로 저장됨)

    Attributes:
        query: 사용자가 보낸 검색어 (trim 완료)
        chosen_url: 필터를 통과한 최상위 URL
        resolved_at: 생성 시각 (UTC)
        candidates: 점수 순으로 정렬된 수용 가능 URL 목록 (chosen_url 포함)
        provider: chosen_url을 찾은 provider
    """

    query: str
    chosen_url: str
    resolved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    candidates: tuple[str, ...] = ()
    provider: str = ""

    def top_candidates(self, limit: int) -> list[str]:
        """상위 limit개 후보 (없으면 chosen_url 하나)"""
        urls = list(self.candidates) or [self.chosen_url]
        return urls[:max(0, limit)]

