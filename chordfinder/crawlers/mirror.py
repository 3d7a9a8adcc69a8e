"""텍스트 미러 (r.jina.ai) 유틸

미러는 임의 페이지를 markdown 비슷한 텍스트로 돌려줍니다.
- 검색 결과 페이지를 미러로 받아 링크를 뽑는 용도 (검색 폴백)
- 대상 페이지를 미러로 받아 텍스트 스냅샷 HTML로 감싸는 용도 (fetch 폴백)
"""

from __future__ import annotations

import re
from typing import Optional

from chordfinder.core.config import settings
from chordfinder.engine.scoring import is_search_engine_url
from chordfinder.utils.text_utils import escape_html
from chordfinder.utils.url_utils import is_http_url, strip_scheme


# "[### 제목](https://...)" 형태의 결과 제목 줄
_HEADING_LINK = re.compile(r"\]\((https?://[^)\s]+)\)\s*$")
# 일반 "[텍스트](https://...)" 링크
_ANY_LINK = re.compile(r"\[[^\]]+\]\((https?://[^)\s]+)\)")


def build_mirror_url(target_url: str, base_url: Optional[str] = None) -> str:
    """'https://a.b/c' -> 'https://r.jina.ai/http://a.b/c'"""
    base = base_url or settings.mirror_base_url
    if not base.endswith("/"):
        base += "/"
    return f"{base}http://{strip_scheme(target_url)}"


def extract_links_from_markdown(markdown: str, limit: int = 8) -> list[str]:
    """미러 markdown에서 결과 링크 추출

    1) "[### " 로 시작하고 "](url)" 로 끝나는 줄 (검색 결과 제목) 우선
    2) 그 다음 모든 "[text](url)" 링크
    검색 엔진 자체 링크는 건너뛰고, 순서 유지 중복 제거.
    """
    out: list[str] = []
    seen: set[str] = set()
    if limit <= 0:
        return out

    def _push(url: str) -> bool:
        if not is_http_url(url) or is_search_engine_url(url) or url in seen:
            return False
        seen.add(url)
        out.append(url)
        return len(out) >= limit

    text = str(markdown or "")
    for line in text.split("\n"):
        if not line.startswith("[### "):
            continue
        m = _HEADING_LINK.search(line)
        if m and _push(m.group(1)):
            return out

    for m in _ANY_LINK.finditer(text):
        if _push(m.group(1)):
            return out

    return out


def render_snapshot_html(text: str, source_url: str) -> str:
    """미러 텍스트를 최소 스타일 HTML 문서로 감쌈 (DOM 복제가 아닌 텍스트 스냅샷)"""
    body = escape_html(text).replace("\n", "<br>")
    src = escape_html(source_url)
    return (
        "<!doctype html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="utf-8">\n'
        "<title>Chords Snapshot</title>\n"
        "<style>\n"
        "body{font-family:system-ui,sans-serif;background:#111;color:#eee;margin:0;padding:16px;line-height:1.45}\n"
        "a{color:#55d48c}\n"
        ".note{position:sticky;top:0;background:#161616;border-bottom:1px solid #333;padding:10px 12px;margin:-16px -16px 16px}\n"
        "</style>\n"
        "</head>\n"
        "<body>\n"
        f'<div class="note">Text snapshot of: <a href="{src}" rel="noreferrer">{src}</a></div>\n'
        f"<div>{body}</div>\n"
        "</body>\n"
        "</html>\n"
    )
