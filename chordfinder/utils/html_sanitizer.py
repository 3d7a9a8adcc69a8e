"""HTML Sanitizer & Embedder

가져온 페이지를 sandbox iframe 안에서 보여줄 수 있게 정리합니다.

- <script> 요소 제거
- CSP / X-Frame-Options <meta http-equiv> 제거
- 기존 <base> 제거 후 원본 URL을 가리키는 <base> 하나를 <head> 첫 자식으로 삽입
- 원본 링크 배너를 <body> 첫 자식으로 삽입

파싱/직렬화는 selectolax가 담당하고, <head>/<body>가 없으면 파서가 최소 문서로 감쌉니다.
"""

from __future__ import annotations

import re
import secrets

from selectolax.parser import HTMLParser, Node

from chordfinder.core.logging import logger, sanitize_for_log
from chordfinder.utils.text_utils import escape_html


BLOCKED_META_HTTP_EQUIV = frozenset(
    {
        "content-security-policy",
        "content-security-policy-report-only",
        "x-frame-options",
    }
)

_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
# 태그는 이미 제거됐으므로 남은 것은 주석/속성 값 안의 텍스트뿐
_RESIDUAL_TAG = re.compile(r"<(?=script|base\b)", re.IGNORECASE)


def build_base_tag(source_url: str) -> str:
    return f'<base href="{escape_html(source_url)}">'


def build_banner(source_url: str) -> str:
    src = escape_html(source_url)
    return (
        '<div style="position:sticky;top:0;z-index:2147483647;background:#111;color:#eee;'
        'padding:10px 12px;font:13px/1.35 system-ui,sans-serif;border-bottom:1px solid #333">'
        "Loaded from first result: "
        f'<a href="{src}" rel="noreferrer" target="_blank" style="color:#55d48c;text-decoration:none">{src}</a>'
        "</div>"
    )


def minimal_document(source_url: str, body_html: str = "") -> str:
    return (
        "<!doctype html><html><head>"
        f"{build_base_tag(source_url)}"
        '<meta charset="utf-8">'
        "</head><body>"
        f"{build_banner(source_url)}{body_html}"
        "</body></html>"
    )


def _strip_tree(tree: HTMLParser) -> None:
    for node in tree.css("script"):
        node.decompose()

    for node in tree.css("meta[http-equiv]"):
        equiv = (node.attributes.get("http-equiv") or "").strip().lower()
        if equiv in BLOCKED_META_HTTP_EQUIV:
            node.decompose()

    for node in tree.css("base"):
        node.decompose()

    if tree.root is not None:
        comments = [node for node in tree.root.traverse(include_text=True) if node.tag == "_comment"]
        for node in comments:
            node.decompose()


def _serialize(tree: HTMLParser) -> str:
    serialized = tree.html or ""
    serialized = _COMMENT.sub("", serialized)
    return _RESIDUAL_TAG.sub("&lt;", serialized)


def _prepend_child(parent: Node, value: str) -> None:
    first = parent.child
    if first is None:
        parent.insert_child(value)
    else:
        first.insert_before(value)


def strip_active_content(html: str) -> str:
    """script/차단 meta/base 요소를 제거한 직렬화 결과 (주석 제거 포함)"""
    tree = HTMLParser(html)
    _strip_tree(tree)
    return _serialize(tree)


def embed(html: str, source_url: str) -> str:
    """가져온 HTML → iframe 삽입용 문서

    <base>와 배너 자리는 직렬화 전에 DOM에 표식 텍스트 노드로 넣고,
    직렬화/잔여 태그 정리가 끝난 뒤 실제 마크업으로 바꿉니다.
    (<style> 안의 "<body>" 같은 문자열에 끌려가지 않음)

    Args:
        html: 원본 HTML (부분/깨진 마크업 허용)
        source_url: 원본 페이지 URL

    Returns:
        <script>가 없고 <base>가 정확히 하나인 HTML 문서
    """
    if not html or not html.strip():
        return minimal_document(source_url)

    marker = secrets.token_hex(16)
    base_marker = f"cfbase{marker}"
    banner_marker = f"cfbanner{marker}"

    try:
        tree = HTMLParser(html)
        _strip_tree(tree)
        head, body = tree.head, tree.body
        if head is None or body is None:
            return minimal_document(source_url, _serialize(tree))
        _prepend_child(head, base_marker)
        _prepend_child(body, banner_marker)
        out = _serialize(tree)
    except Exception as e:
        logger.warning(f"[SANITIZER] Parse failed, falling back to escaped text: {type(e).__name__}: {e}")
        return minimal_document(source_url, f"<pre>{escape_html(html)}</pre>")

    if out.count(base_marker) != 1 or out.count(banner_marker) != 1:
        logger.warning(f"[SANITIZER] Insertion point lost while cleaning: {sanitize_for_log(source_url)}")
        return minimal_document(source_url, f"<pre>{escape_html(html)}</pre>")

    out = out.replace(base_marker, build_base_tag(source_url))
    out = out.replace(banner_marker, build_banner(source_url))

    if not out.lstrip()[:9].lower().startswith("<!doctype"):
        out = "<!doctype html>" + out
    return out
