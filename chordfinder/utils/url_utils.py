"""URL 파싱 유틸리티

검색 엔진 리다이렉트(클릭 추적) 링크를 실제 목적지 URL로 풀어냅니다.
모든 디코더는 예외를 던지지 않고, 풀 수 없으면 빈 문자열을 반환합니다.
"""
import base64
import binascii
from typing import Optional
from urllib.parse import urlparse, parse_qs, unquote, urlunparse


GOOGLE_BASE = "https://www.google.com"
DUCKDUCKGO_BASE = "https://duckduckgo.com"

_BING_HOSTS = ("www.bing.com", "bing.com")
_BING_TRACKING_PREFIX = "/ck/"
_BING_PAYLOAD_PREFIX = "a1"


def is_http_url(url: Optional[str]) -> bool:
    """절대 http(s) URL이고 host가 있는지 확인"""
    if not url or not isinstance(url, str):
        return False
    if not url.startswith(("http://", "https://")):
        return False
    try:
        parsed = urlparse(url)
        return bool(parsed.hostname)
    except ValueError:
        return False


def get_host(url: str) -> Optional[str]:
    """URL의 hostname(소문자)을 반환. 파싱 실패 시 None"""
    if not url:
        return None
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def host_matches(host: str, domain: str) -> bool:
    """host가 domain과 같거나 그 서브도메인인지"""
    return host == domain or host.endswith("." + domain)


def _first_param(url: str, name: str) -> str:
    params = parse_qs(urlparse(url).query)
    values = params.get(name)
    return values[0] if values else ""


def _keep_if_http(value: str) -> str:
    return value if is_http_url(value) else ""


def decode_google_href(href: str) -> str:
    """Google 결과 링크 디코딩

    Examples:
        >>> decode_google_href("/url?q=https://tabs.example.com/a&sa=U")
        'https://tabs.example.com/a'
    """
    if not href:
        return ""
    try:
        if href.startswith("/url?"):
            return _keep_if_http(_first_param(GOOGLE_BASE + href, "q"))
        if is_http_url(href):
            parsed = urlparse(href)
            host = (parsed.hostname or "").lower()
            if host_matches(host, "google.com") and parsed.path == "/url":
                return _keep_if_http(_first_param(href, "q") or _first_param(href, "url"))
            return href
    except ValueError:
        return ""
    return ""


def decode_bing_href(href: str) -> str:
    """Bing 추적 링크(/ck/a?...&u=a1<base64url>) 디코딩

    - host가 bing이 아니거나 경로가 /ck/로 시작하지 않으면 그대로 반환
    - u 파라미터가 없거나 base64가 깨졌으면 빈 문자열
    """
    if not href or not is_http_url(href):
        return ""
    try:
        parsed = urlparse(href)
        host = (parsed.hostname or "").lower()
        if host not in _BING_HOSTS or not parsed.path.startswith(_BING_TRACKING_PREFIX):
            return href

        payload = _first_param(href, "u")
        if not payload:
            return ""
        if payload.startswith(_BING_PAYLOAD_PREFIX):
            payload = payload[len(_BING_PAYLOAD_PREFIX):]
        payload += "=" * (-len(payload) % 4)

        decoded = base64.urlsafe_b64decode(payload.encode("ascii")).decode("utf-8")
        return _keep_if_http(decoded)
    except (ValueError, binascii.Error, UnicodeError):
        return ""


def decode_duckduckgo_href(href: str) -> str:
    """DuckDuckGo 리다이렉트(/l/?uddg=...) 디코딩"""
    if not href:
        return ""
    try:
        if href.startswith("//"):
            href = "https:" + href
        if href.startswith("/l/?"):
            return _keep_if_http(unquote(_first_param(DUCKDUCKGO_BASE + href, "uddg")))
        if is_http_url(href):
            host = get_host(href) or ""
            if not host_matches(host, "duckduckgo.com"):
                return href
            return _keep_if_http(unquote(_first_param(href, "uddg")))
    except ValueError:
        return ""
    return ""


def normalize_url(url: str) -> str:
    """중복 제거용 정규화: fragment 제거 + scheme/host 소문자"""
    if not url:
        return ""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return url.strip()
    return urlunparse(
        (
            parsed.scheme.lower(),
            parsed.netloc.lower(),
            parsed.path or "/",
            parsed.params,
            parsed.query,
            "",
        )
    )


def strip_scheme(url: str) -> str:
    """'https://a.b/c' -> 'a.b/c'"""
    for prefix in ("https://", "http://"):
        if url.startswith(prefix):
            return url[len(prefix):]
    return url
