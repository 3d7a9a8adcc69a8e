"""검색 엔진 정의 (URL 생성 + 결과 링크 마커 + 리다이렉트 디코더)

HTTP/브라우저 provider가 같은 엔진 정의를 공유합니다.
HTML 파싱은 네트워크와 분리된 순수 함수입니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from urllib.parse import quote

from selectolax.parser import HTMLParser

from chordfinder.utils.url_utils import (
    decode_bing_href,
    decode_duckduckgo_href,
    decode_google_href,
)


def extract_google_hrefs(html: str) -> list[str]:
    """#search 영역에서 <h3> 제목을 가진 앵커만 (광고/부가 링크 제외)"""
    if not html:
        return []
    parser = HTMLParser(html)
    hrefs: list[str] = []
    for a in parser.css("#search a"):
        if a.css_first("h3") is None:
            continue
        href = a.attributes.get("href") or ""
        if href:
            hrefs.append(href)
    return hrefs


def extract_bing_hrefs(html: str) -> list[str]:
    if not html:
        return []
    parser = HTMLParser(html)
    return [a.attributes.get("href") or "" for a in parser.css("li.b_algo h2 a[href]")]


def extract_duckduckgo_hrefs(html: str) -> list[str]:
    """html 버전(.result__a) 우선, 없으면 JS 버전(data-testid) 마커"""
    if not html:
        return []
    parser = HTMLParser(html)
    nodes = parser.css(".result__a") or parser.css("a[data-testid='result-title-a']")
    return [n.attributes.get("href") or "" for n in nodes]


@dataclass(frozen=True)
class SearchEngine:
    """검색 엔진 1개에 대한 정의

    Attributes:
        name: provider 이름
        search_url_template: `{query}` 자리에 URL 인코딩된 검색어가 들어감
        extract_hrefs: 검색 결과 HTML → 원본 href 목록
        decode: 원본 href → 목적지 URL (실패 시 "")
        dom_selector: 렌더링된 DOM에서 결과 앵커를 찾는 셀렉터
    """

    name: str
    search_url_template: str
    extract_hrefs: Callable[[str], list[str]]
    decode: Callable[[str], str]
    dom_selector: str

    def build_search_url(self, query: str) -> str:
        return self.search_url_template.format(query=quote(query, safe=""))


GOOGLE = SearchEngine(
    name="google",
    search_url_template="https://www.google.com/search?hl=en&gl=us&num=10&q={query}",
    extract_hrefs=extract_google_hrefs,
    decode=decode_google_href,
    dom_selector="#search a:has(h3)",
)

BING = SearchEngine(
    name="bing",
    search_url_template="https://www.bing.com/search?q={query}",
    extract_hrefs=extract_bing_hrefs,
    decode=decode_bing_href,
    dom_selector="li.b_algo h2 a[href]",
)

DUCKDUCKGO = SearchEngine(
    name="duckduckgo",
    search_url_template="https://duckduckgo.com/html/?q={query}",
    extract_hrefs=extract_duckduckgo_hrefs,
    decode=decode_duckduckgo_href,
    dom_selector=".result__a, a[data-testid='result-title-a']",
)

# 고정 우선순위: primary → secondary → tertiary
DEFAULT_ENGINES: tuple[SearchEngine, ...] = (GOOGLE, BING, DUCKDUCKGO)
