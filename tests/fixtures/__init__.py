"""테스트 자산(데이터) 레이어

규칙:
- 로직 없음 (단순 str/dict/list)
- 엔진/네트워크 의존 없음
"""

from .search_pages import (
    DUCKDUCKGO_RESULTS_HTML,
    GOOGLE_RESULTS_HTML,
    MIRROR_SEARCH_MARKDOWN,
)
from .target_pages import CHORD_PAGE_HTML, MIRROR_PAGE_TEXT

__all__ = [
    "GOOGLE_RESULTS_HTML",
    "DUCKDUCKGO_RESULTS_HTML",
    "MIRROR_SEARCH_MARKDOWN",
    "CHORD_PAGE_HTML",
    "MIRROR_PAGE_TEXT",
]
