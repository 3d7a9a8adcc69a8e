"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Fake(provider / HTTP client) 주입

금지:
- 실제 네트워크 호출
- 실제 브라우저 실행
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional, Union

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chordfinder.crawlers.http_client import HttpResponse  # noqa: E402
from chordfinder.engine.result import Candidate  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


class FakeProvider:
    """SearchProvider 대역

    - 고정 URL 목록을 Candidate로 돌려줌
    - 호출 횟수/검색어 기록
    """

    def __init__(self, name: str, urls: Optional[list[str]] = None, error: Optional[Exception] = None):
        self.name = name
        self.urls = urls or []
        self.error = error
        self.calls = 0
        self.queries: list[str] = []

    async def fetch_candidates(self, query: str) -> list[Candidate]:
        self.calls += 1
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return [Candidate(url=u, provider=self.name, position=i) for i, u in enumerate(self.urls)]


Route = Union[HttpResponse, None]


class FakeHttpClient:
    """SharedHttpClient 대역 (URL → 응답 고정 매핑)

    등록되지 않은 URL은 네트워크 오류(None)로 취급합니다.
    """

    def __init__(self, routes: Optional[dict[str, Route]] = None):
        self.routes: dict[str, Route] = dict(routes or {})
        self.requested: list[str] = []

    def add(self, url: str, status: int = 200, text: str = "", content_type: str = "text/html; charset=utf-8") -> None:
        self.routes[url] = HttpResponse(status=status, text=text, headers={"content-type": content_type}, url=url)

    async def get(self, url: str, *, timeout_s: float, headers=None, max_redirects: int = 5) -> Optional[HttpResponse]:
        self.requested.append(url)
        return self.routes.get(url)

    async def get_text(self, url: str, *, timeout_s: float, headers=None) -> Optional[tuple[int, str]]:
        res = await self.get(url, timeout_s=timeout_s, headers=headers)
        if res is None:
            return None
        return res.status, res.text

    async def close(self) -> None:
        return None


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def make_provider():
    """FakeProvider 팩토리"""
    def _make(name: str, urls: Optional[list[str]] = None, error: Optional[Exception] = None) -> FakeProvider:
        return FakeProvider(name, urls, error)
    return _make
