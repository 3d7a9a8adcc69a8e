"""Candidate Filter & Scorer

후보 URL의 수용 여부를 판단하고, 코드 악보 사이트일 가능성으로 점수를 매깁니다.

점수 구성:
- 프레임 허용 악보 사이트(allowlist): +120
- host 또는 path에 악보 키워드(chord, tab, ...) 포함: +35
- 검색어 토큰이 URL에 포함될 때마다: +4
- 수용 불가 URL: -10000 (별도 분기 없이 정렬에서 자연히 밀려남)
"""

from __future__ import annotations

from typing import Iterable, Sequence
from urllib.parse import unquote, urlparse

from chordfinder.utils.url_utils import get_host, host_matches, normalize_url

from .result import Candidate, ScoredCandidate


SEARCH_ENGINE_DOMAINS: tuple[str, ...] = (
    "google.com",
    "bing.com",
    "duckduckgo.com",
    "jina.ai",
)

# 영상/소셜/프레임 삽입을 막는 것으로 알려진 사이트
BLOCKED_DOMAINS: tuple[str, ...] = (
    "youtube.com",
    "youtu.be",
    "facebook.com",
    "instagram.com",
    "tiktok.com",
    "gstatic.com",
    "googleusercontent.com",
    "spotify.com",
    "music.apple.com",
    "pinterest.com",
    "twitter.com",
    "x.com",
    "reddit.com",
    "linkedin.com",
)

FRAME_FRIENDLY_DOMAINS: tuple[str, ...] = (
    "tab4u.com",
    "nagnu.co.il",
    "e-chords.com",
    "cifraclub.com",
    "cifraclub.com.br",
    "chordie.com",
    "azchords.com",
    "guitartabsexplorer.com",
    "chordsworld.com",
    "ukutabs.com",
    "guitaretab.com",
)

CHORD_KEYWORDS: tuple[str, ...] = ("chord", "tab", "guitar", "ukulele", "cifra", "acord")

FRAME_FRIENDLY_BONUS = 120
KEYWORD_BONUS = 35
TOKEN_BONUS = 4
UNACCEPTABLE_SCORE = -10000


def is_search_engine_host(host: str) -> bool:
    """검색 엔진 도메인 여부 (google 국가 도메인 포함)"""
    if not host:
        return False
    if any(host_matches(host, d) for d in SEARCH_ENGINE_DOMAINS):
        return True
    # www.google.co.il 같은 국가별 도메인
    return "google" in host.split(".")[:-1]


def is_search_engine_url(url: str) -> bool:
    host = get_host(url)
    return bool(host) and is_search_engine_host(host)


def is_acceptable(url: str) -> bool:
    """후보 URL 수용 여부

    - scheme은 http/https만
    - host 파싱 실패 시 거부
    - 검색 엔진/차단 목록 도메인(서브도메인 포함) 거부
    """
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https"):
        return False

    host = get_host(url)
    if not host:
        return False
    if is_search_engine_host(host):
        return False
    return not any(host_matches(host, d) for d in BLOCKED_DOMAINS)


def is_frame_friendly(url: str) -> bool:
    host = get_host(url)
    return bool(host) and any(host_matches(host, d) for d in FRAME_FRIENDLY_DOMAINS)


def score(url: str, query_tokens: Iterable[str]) -> int:
    """후보 URL 점수 계산

    키워드는 host + path에서만 찾고, 토큰은 퍼센트 디코딩한 전체 URL에서 찾습니다.
    """
    if not is_acceptable(url):
        return UNACCEPTABLE_SCORE

    parsed = urlparse(url)
    location = ((parsed.hostname or "") + parsed.path).lower()
    decoded = unquote(url).casefold()

    total = 0
    if is_frame_friendly(url):
        total += FRAME_FRIENDLY_BONUS
    if any(k in location for k in CHORD_KEYWORDS):
        total += KEYWORD_BONUS
    for tok in query_tokens:
        if tok and tok.casefold() in decoded:
            total += TOKEN_BONUS
    return total


def rank_candidates(
    candidates: Sequence[Candidate], query_tokens: Sequence[str]
) -> list[ScoredCandidate]:
    """중복 제거(정규화 URL 기준) 후 점수 내림차순, 동점이면 발견 순서 오름차순"""
    scored: list[ScoredCandidate] = []
    seen: set[str] = set()
    for cand in candidates:
        key = normalize_url(cand.url)
        if not key or key in seen:
            continue
        seen.add(key)
        scored.append(ScoredCandidate(candidate=cand, score=score(cand.url, query_tokens), index=len(scored)))

    scored.sort(key=lambda s: (-s.score, s.index))
    return scored
