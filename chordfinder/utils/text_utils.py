"""텍스트 처리 유틸리티 (검색어 정규화/토큰화/HTML 이스케이프)"""

from __future__ import annotations

import re


_TOKEN_SPLIT = re.compile(r"\W+")
_MIN_TOKEN_LENGTH = 3


def normalize_query(raw: object) -> str:
    """입력 검색어 정리: 문자열화 + 앞뒤 공백 제거 + 연속 공백 축약.

    대소문자는 유지합니다 (검색 엔진에 그대로 보냄).
    """
    if raw is None:
        return ""
    return re.sub(r"\s+", " ", str(raw)).strip()


def build_cache_key(query: str) -> str:
    """캐시 키 생성 (정규화 + casefold)

    Examples:
        >>> build_cache_key("  Adele   HELLO ")
        'adele hello'
    """
    return normalize_query(query).casefold()


def tokenize_query(query: str) -> list[str]:
    """점수 계산용 토큰화.

    - casefold 후 유니코드 단어 문자 덩어리 사용 (히브리어 등 포함)
    - 길이 3 미만은 버림
    - 순서 유지 중복 제거
    """
    if not query:
        return []

    tokens: list[str] = []
    seen: set[str] = set()
    for tok in _TOKEN_SPLIT.split(query.casefold()):
        if len(tok) < _MIN_TOKEN_LENGTH or tok in seen:
            continue
        seen.add(tok)
        tokens.append(tok)
    return tokens


def escape_html(value: object) -> str:
    """HTML 텍스트/속성 값 이스케이프 (&, <, >, ")"""
    return (
        str(value if value is not None else "")
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )
