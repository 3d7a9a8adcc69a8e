"""인메모리 TTL 캐시 서비스 - 캐싱 로직만 담당

- 프로세스 단위 dict 하나 (last-write-wins)
- 만료된 항목은 다음 조회 시 지연 삭제
- 쓰기는 항목 단위 통째 교체라 경합 시에도 상태가 깨지지 않음
"""
import threading
import time
from typing import Callable, Generic, Optional, TypeVar

from chordfinder.core.logging import logger


V = TypeVar("V")


class TTLCache(Generic[V]):
    """키별 만료 시각을 가진 단순 캐시"""

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic, name: str = "cache"):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self.name = name
        self._clock = clock
        self._entries: dict[str, tuple[float, V]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[V]:
        """
        캐시 조회

        Args:
            key: 캐시 키 (정규화 완료)

        Returns:
            저장된 값 또는 None (없음/만료)
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug(f"[{self.name}] miss: {key}")
                return None
            expires_at, value = entry
            if now >= expires_at:
                del self._entries[key]
                logger.debug(f"[{self.name}] expired: {key}")
                return None
        logger.debug(f"[{self.name}] hit: {key}")
        return value

    def set(self, key: str, value: V, ttl_seconds: Optional[float] = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = (self._clock() + ttl, value)
        logger.debug(f"[{self.name}] set: {key}, TTL: {ttl}s")

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
