"""Utilities package - Flat structure (no nested directories)"""

# URL utilities
from .url_utils import (
    decode_bing_href,
    decode_duckduckgo_href,
    decode_google_href,
    get_host,
    host_matches,
    is_http_url,
    normalize_url,
    strip_scheme,
)

# Text utilities
from .text_utils import build_cache_key, escape_html, normalize_query, tokenize_query

# HTML
from .html_sanitizer import embed, minimal_document, strip_active_content

__all__ = [
    # url
    "is_http_url",
    "get_host",
    "host_matches",
    "decode_google_href",
    "decode_bing_href",
    "decode_duckduckgo_href",
    "normalize_url",
    "strip_scheme",
    # text
    "normalize_query",
    "build_cache_key",
    "tokenize_query",
    "escape_html",
    # html
    "embed",
    "minimal_document",
    "strip_active_content",
]
