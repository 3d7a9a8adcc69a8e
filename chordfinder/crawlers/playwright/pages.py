"""Playwright page 설정/보조 함수.

Page 생성 후 라우팅(리소스 차단), 기본 타임아웃, 쿠키 동의창 닫기 등
공통 처리를 모아 둡니다.
"""

from __future__ import annotations

import asyncio

from playwright.async_api import Page

from chordfinder.core.config import settings
from chordfinder.core.logging import logger


_BLOCKED_RESOURCE_TYPES = {"image", "media", "font"}

# 쿠키/동의 다이얼로그 버튼 (Google/Bing/일반 CMP)
CONSENT_SELECTORS = (
    "button#L2AGLb",
    "button#bnp_btn_accept",
    "button[aria-label='Accept all']",
    "button:has-text('Accept all')",
    "button:has-text('I agree')",
    "#onetrust-accept-btn-handler",
)


async def configure_page(page: Page, *, block_resources: bool = False) -> Page:
    page.set_default_timeout(settings.browser_navigation_timeout_s * 1000)

    if not block_resources:
        return page

    async def _route_handler(route, request):
        try:
            if request.resource_type in _BLOCKED_RESOURCE_TYPES:
                await route.abort()
                return
            await route.continue_()
        except Exception:
            return

    try:
        await page.route("**/*", _route_handler)
    except Exception:
        pass

    return page


async def settle(page: Page, settle_ms: int | None = None) -> None:
    """domcontentloaded 이후 잠깐 대기 (지연 렌더링 여유)"""
    delay = settings.browser_settle_ms if settle_ms is None else settle_ms
    if delay > 0:
        await asyncio.sleep(delay / 1000.0)


async def dismiss_consent(page: Page, timeout_ms: int = 1500) -> bool:
    """쿠키 동의창이 보이면 닫기 (best-effort, 실패는 무시)"""
    for selector in CONSENT_SELECTORS:
        try:
            button = await page.query_selector(selector)
            if button is None:
                continue
            await button.click(timeout=timeout_ms)
            logger.debug(f"[Playwright] Consent dialog dismissed ({selector})")
            return True
        except Exception:
            continue
    return False
