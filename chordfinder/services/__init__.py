"""비즈니스 로직 서비스.

ChordsService는 engine/crawlers에 의존하므로 chordfinder.services.chords_service에서 직접 import합니다.
"""

from .cache_service import TTLCache

__all__ = ["TTLCache"]
