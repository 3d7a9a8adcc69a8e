"""검색 provider 테스트 (HTML 파싱 + 실패 → 빈 리스트)"""

from __future__ import annotations

import base64
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from chordfinder.core.exceptions import BrowserEnvironmentException
from chordfinder.crawlers.mirror import build_mirror_url
from chordfinder.crawlers.providers import (
    BING,
    DUCKDUCKGO,
    GOOGLE,
    BrowserSearchProvider,
    HttpSearchProvider,
    MirrorSearchProvider,
    build_candidates,
    build_search_providers,
)
from chordfinder.crawlers.providers.engines import (
    extract_bing_hrefs,
    extract_duckduckgo_hrefs,
    extract_google_hrefs,
)
from tests.fixtures import DUCKDUCKGO_RESULTS_HTML, GOOGLE_RESULTS_HTML, MIRROR_SEARCH_MARKDOWN

QUERY = "adele hello"
CIFRA = "https://www.cifraclub.com.br/adele/hello/"


def _bing_results_html() -> str:
    payload = base64.urlsafe_b64encode(CIFRA.encode()).decode().rstrip("=")
    return f"""
    <html><body><ol id="b_results">
      <li class="b_algo"><h2><a href="https://www.bing.com/ck/a?!&amp;&amp;p=1&amp;u=a1{payload}&amp;ntb=1">Hello chords</a></h2></li>
      <li class="b_algo"><h2><a href="https://www.chordie.com/chord.pere/adele/hello">Chordie</a></h2></li>
      <li class="b_ad"><h2><a href="https://ads.example.com/">Ad</a></h2></li>
    </ol></body></html>
    """


class TestEngineParsing:
    def test_google_only_headline_anchors_inside_results(self):
        hrefs = extract_google_hrefs(GOOGLE_RESULTS_HTML)
        assert len(hrefs) == 3
        assert hrefs[0].startswith("/url?q=https://www.tab4u.com/")

    def test_bing_result_anchors(self):
        assert len(extract_bing_hrefs(_bing_results_html())) == 2

    def test_duckduckgo_result_anchors(self):
        assert len(extract_duckduckgo_hrefs(DUCKDUCKGO_RESULTS_HTML)) == 2

    def test_duckduckgo_js_markup_fallback(self):
        html = '<a data-testid="result-title-a" href="https://tabs.example.com/a">A</a>'
        assert extract_duckduckgo_hrefs(html) == ["https://tabs.example.com/a"]

    @pytest.mark.parametrize("extract", [extract_google_hrefs, extract_bing_hrefs, extract_duckduckgo_hrefs])
    def test_empty_html(self, extract):
        assert extract("") == []
        assert extract("<html><body>captcha</body></html>") == []

    def test_search_url_encodes_query(self):
        assert GOOGLE.build_search_url("guns n' roses / patience").endswith("q=guns%20n%27%20roses%20%2F%20patience")
        assert BING.build_search_url("a&b") == "https://www.bing.com/search?q=a%26b"


class TestBuildCandidates:
    def test_decode_dedupe_and_positions(self):
        hrefs = ["/url?q=https://a.example.com/x", "/search?q=y", "https://a.example.com/x#frag", "https://b.example.com/"]
        cands = build_candidates(hrefs, GOOGLE.decode, "google")
        assert [c.url for c in cands] == ["https://a.example.com/x", "https://b.example.com/"]
        assert [c.position for c in cands] == [0, 1]
        assert all(c.provider == "google" for c in cands)

    def test_limit(self):
        hrefs = [f"https://site{i}.example.com/" for i in range(20)]
        assert len(build_candidates(hrefs, lambda h: h, "x", limit=10)) == 10


@pytest.mark.asyncio
class TestHttpSearchProvider:
    async def test_google_results(self, fake_http):
        fake_http.add(GOOGLE.build_search_url(QUERY), text=GOOGLE_RESULTS_HTML)
        cands = await HttpSearchProvider(GOOGLE, fake_http).fetch_candidates(QUERY)

        assert [c.url for c in cands] == [
            "https://www.tab4u.com/tabs/songs/1234_Adele_-_Hello.html",
            "https://www.youtube.com/watch?v=YQHsXMglC9A",
            "https://www.e-chords.com/chords/adele/hello",
        ]

    async def test_bing_tracking_links_decoded(self, fake_http):
        fake_http.add(BING.build_search_url(QUERY), text=_bing_results_html())
        cands = await HttpSearchProvider(BING, fake_http).fetch_candidates(QUERY)

        assert [c.url for c in cands] == [CIFRA, "https://www.chordie.com/chord.pere/adele/hello"]

    async def test_duckduckgo_redirects_decoded(self, fake_http):
        fake_http.add(DUCKDUCKGO.build_search_url(QUERY), text=DUCKDUCKGO_RESULTS_HTML)
        cands = await HttpSearchProvider(DUCKDUCKGO, fake_http).fetch_candidates(QUERY)

        assert cands[0].url == "https://www.chordie.com/chord.pere/adele/hello"

    async def test_network_error_returns_empty(self, fake_http):
        assert await HttpSearchProvider(GOOGLE, fake_http).fetch_candidates(QUERY) == []

    async def test_non_2xx_returns_empty(self, fake_http):
        fake_http.add(GOOGLE.build_search_url(QUERY), status=429, text=GOOGLE_RESULTS_HTML)
        assert await HttpSearchProvider(GOOGLE, fake_http).fetch_candidates(QUERY) == []

    async def test_no_links_returns_empty(self, fake_http):
        fake_http.add(GOOGLE.build_search_url(QUERY), text="<html><body>unusual traffic</body></html>")
        assert await HttpSearchProvider(GOOGLE, fake_http).fetch_candidates(QUERY) == []

    async def test_unexpected_error_returns_empty(self):
        client = MagicMock()
        client.get_text = AsyncMock(side_effect=RuntimeError("boom"))
        assert await HttpSearchProvider(GOOGLE, client).fetch_candidates(QUERY) == []


@pytest.mark.asyncio
class TestMirrorSearchProvider:
    async def test_links_from_markdown(self, fake_http):
        provider = MirrorSearchProvider(fake_http)
        fake_http.add(provider.build_url(QUERY), text=MIRROR_SEARCH_MARKDOWN, content_type="text/plain")

        cands = await provider.fetch_candidates(QUERY)

        assert cands[0].url == "https://www.cifraclub.com/adele/hello/"
        assert all(c.provider == "mirror" for c in cands)

    async def test_build_url_wraps_google_search(self):
        provider = MirrorSearchProvider(MagicMock())
        assert provider.build_url("adele hello") == build_mirror_url("http://www.google.com/search?q=adele%20hello")

    async def test_failure_returns_empty(self, fake_http):
        assert await MirrorSearchProvider(fake_http).fetch_candidates(QUERY) == []


def _fake_pool(page=None, error=None):
    pool = MagicMock()

    @asynccontextmanager
    async def _page(*, block_resources=False):
        if error is not None:
            raise error
        yield page

    pool.page = _page
    return pool


@pytest.mark.asyncio
class TestBrowserSearchProvider:
    async def test_rendered_dom_hrefs(self):
        page = AsyncMock()
        page.eval_on_selector_all = AsyncMock(
            return_value=["/url?q=https://www.tab4u.com/x&sa=U", "", "/search?q=more"]
        )
        provider = BrowserSearchProvider(GOOGLE, _fake_pool(page))

        with patch("chordfinder.crawlers.providers.browser_provider.settle", AsyncMock()), \
             patch("chordfinder.crawlers.providers.browser_provider.dismiss_consent", AsyncMock(return_value=False)):
            cands = await provider.fetch_candidates(QUERY)

        assert [c.url for c in cands] == ["https://www.tab4u.com/x"]
        page.eval_on_selector_all.assert_awaited_once()
        assert page.eval_on_selector_all.await_args.args[0] == GOOGLE.dom_selector

    async def test_navigation_error_returns_empty(self):
        page = AsyncMock()
        page.goto = AsyncMock(side_effect=PlaywrightError("net::ERR_TIMED_OUT"))
        provider = BrowserSearchProvider(GOOGLE, _fake_pool(page))

        assert await provider.fetch_candidates(QUERY) == []

    async def test_missing_browser_propagates(self):
        provider = BrowserSearchProvider(GOOGLE, _fake_pool(error=BrowserEnvironmentException("Executable doesn't exist")))

        with pytest.raises(BrowserEnvironmentException):
            await provider.fetch_candidates(QUERY)


class TestBuildSearchProviders:
    def test_http_mode_order(self, fake_http):
        providers = build_search_providers("http", client=fake_http)
        assert [p.name for p in providers] == ["google", "bing", "duckduckgo", "mirror"]

    def test_browser_mode_uses_pool(self, fake_http):
        providers = build_search_providers("browser", client=fake_http, pool=MagicMock(), include_mirror=False)
        assert [p.name for p in providers] == ["google", "bing", "duckduckgo"]
        assert all(isinstance(p, BrowserSearchProvider) for p in providers)

    def test_browser_mode_requires_pool(self):
        with pytest.raises(ValueError):
            build_search_providers("browser")

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            build_search_providers("carrier-pigeon")
