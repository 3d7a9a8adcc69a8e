"""ResolutionOrchestrator 테스트 (네트워크 없음, FakeProvider 사용)"""

from __future__ import annotations

import pytest

from chordfinder.core.exceptions import InvalidQueryException, NoResultFoundException
from chordfinder.engine.orchestrator import ResolutionOrchestrator
from chordfinder.services.cache_service import TTLCache

TAB4U = "https://www.tab4u.com/tabs/songs/1234_Adele_-_Hello.html"
ECHORDS = "https://www.e-chords.com/chords/adele/hello"
YOUTUBE = "https://www.youtube.com/watch?v=YQHsXMglC9A"


@pytest.mark.asyncio
async def test_primary_success_skips_other_providers(make_provider):
    google = make_provider("google", [YOUTUBE, TAB4U])
    bing = make_provider("bing", [ECHORDS])
    ddg = make_provider("duckduckgo", [ECHORDS])

    orchestrator = ResolutionOrchestrator([google, bing, ddg])
    result = await orchestrator.resolve("Adele Hello")

    assert result.chosen_url == TAB4U
    assert result.provider == "google"
    assert result.query == "Adele Hello"
    assert YOUTUBE not in result.candidates
    assert google.calls == 1
    assert bing.calls == 0
    assert ddg.calls == 0


@pytest.mark.asyncio
async def test_falls_through_to_secondary_when_primary_empty(make_provider):
    google = make_provider("google", [])
    bing = make_provider("bing", [ECHORDS])

    result = await ResolutionOrchestrator([google, bing]).resolve("adele hello")

    assert result.chosen_url == ECHORDS
    assert result.provider == "bing"
    assert google.calls == 1
    assert bing.calls == 1


@pytest.mark.asyncio
async def test_unacceptable_only_provider_is_skipped(make_provider):
    google = make_provider("google", [YOUTUBE, "https://www.google.com/search?q=x"])
    bing = make_provider("bing", ["https://tabs.example.org/adele/hello"])

    result = await ResolutionOrchestrator([google, bing]).resolve("adele hello")

    assert result.chosen_url == "https://tabs.example.org/adele/hello"
    assert result.candidates == ("https://tabs.example.org/adele/hello",)


@pytest.mark.asyncio
async def test_all_disallowed_raises_no_result(make_provider):
    providers = [
        make_provider("google", [YOUTUBE]),
        make_provider("bing", ["https://www.facebook.com/adele"]),
        make_provider("duckduckgo", []),
        make_provider("mirror", ["https://r.jina.ai/http://www.google.com/search?q=x"]),
    ]

    with pytest.raises(NoResultFoundException) as exc_info:
        await ResolutionOrchestrator(providers).resolve("adele hello")

    assert exc_info.value.message == "Could not resolve first search result"
    assert all(p.calls == 1 for p in providers)


@pytest.mark.asyncio
async def test_second_resolve_served_from_cache(make_provider):
    google = make_provider("google", [TAB4U])
    orchestrator = ResolutionOrchestrator([google])

    first = await orchestrator.resolve("Adele Hello")
    second = await orchestrator.resolve("  adele   HELLO ")

    assert second is first
    assert google.calls == 1


@pytest.mark.asyncio
async def test_failed_resolution_is_not_cached(make_provider):
    google = make_provider("google", [])
    orchestrator = ResolutionOrchestrator([google])

    for _ in range(2):
        with pytest.raises(NoResultFoundException):
            await orchestrator.resolve("adele hello")

    assert google.calls == 2


@pytest.mark.asyncio
async def test_expired_cache_queries_again(make_provider):
    now = [0.0]
    cache = TTLCache(300, clock=lambda: now[0])
    google = make_provider("google", [TAB4U])
    orchestrator = ResolutionOrchestrator([google], cache=cache)

    await orchestrator.resolve("adele hello")
    now[0] += 301
    await orchestrator.resolve("adele hello")

    assert google.calls == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "   ", None])
async def test_missing_query(make_provider, query):
    google = make_provider("google", [TAB4U])

    with pytest.raises(InvalidQueryException) as exc_info:
        await ResolutionOrchestrator([google]).resolve(query)

    assert exc_info.value.reason == "Missing query"
    assert google.calls == 0


@pytest.mark.asyncio
async def test_query_is_trimmed_before_search(make_provider):
    google = make_provider("google", [TAB4U])

    await ResolutionOrchestrator([google]).resolve("  Adele   Hello  ")

    assert google.queries == ["Adele Hello"]


@pytest.mark.asyncio
async def test_candidates_ranked_across_providers(make_provider):
    google = make_provider("google", [YOUTUBE])
    bing = make_provider("bing", ["https://lyrics.example.com/adele", TAB4U, ECHORDS + "#top"])

    result = await ResolutionOrchestrator([google, bing]).resolve("adele hello")

    assert result.chosen_url == TAB4U
    assert result.top_candidates(5) == [TAB4U, ECHORDS + "#top", "https://lyrics.example.com/adele"]


def test_requires_providers():
    with pytest.raises(ValueError):
        ResolutionOrchestrator([])
