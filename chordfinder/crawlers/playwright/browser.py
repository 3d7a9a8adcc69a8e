"""Playwright 브라우저 풀.

브라우저 프로세스는 서버 생애 동안 하나만 (lazy) 띄워 공유하고,
요청마다 새 BrowserContext + Page를 만들어 요청이 끝나면 무조건 닫습니다.
앱 lifespan에서 start()/close()로 생명주기를 관리합니다.
"""

from __future__ import annotations

import asyncio
import platform
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import async_playwright, Browser, Page, Playwright

from chordfinder.core.config import settings
from chordfinder.core.logging import logger
from chordfinder.core.exceptions import BrowserException, BrowserEnvironmentException

from .pages import configure_page


# Playwright가 브라우저 바이너리를 찾지 못했을 때의 메시지 조각
_MISSING_BINARY_MARKERS = (
    "executable doesn't exist",
    "playwright install",
    "looks like playwright was just installed",
)


def build_launch_args() -> list[str]:
    args: list[str] = [
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--disable-background-networking",
        "--disable-background-timer-throttling",
        "--disable-renderer-backgrounding",
        "--disable-default-apps",
        "--disable-extensions",
        "--no-first-run",
        "--no-default-browser-check",
    ]

    if platform.system().lower() == "linux":
        args.extend(["--no-sandbox", "--disable-setuid-sandbox"])

    return args


def is_missing_browser_error(error: BaseException) -> bool:
    text = str(error).lower()
    return any(marker in text for marker in _MISSING_BINARY_MARKERS)


class BrowserPool:
    """공유 Chromium 프로세스 + 요청별 격리 컨텍스트"""

    def __init__(self, *, headless: bool = True, max_retries: Optional[int] = None) -> None:
        self._lock = asyncio.Lock()
        self._headless = headless
        self._max_retries = max(1, max_retries or settings.crawler_max_retries)
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def is_running(self) -> bool:
        try:
            return self._browser is not None and self._browser.is_connected()
        except Exception:
            return False

    async def start(self) -> Browser:
        """브라우저를 띄우거나 이미 떠 있는 브라우저를 반환"""
        async with self._lock:
            if self.is_running:
                return self._browser

            await self._teardown()

            last_err: Optional[Exception] = None
            for attempt in range(1, self._max_retries + 1):
                try:
                    logger.info(f"[Playwright] Launching browser (attempt {attempt}/{self._max_retries})...")
                    pw = await asyncio.wait_for(async_playwright().start(), timeout=20.0)
                    self._playwright = pw
                    self._browser = await asyncio.wait_for(
                        pw.chromium.launch(
                            headless=self._headless,
                            args=build_launch_args(),
                            timeout=settings.browser_launch_timeout_s * 1000,
                        ),
                        timeout=settings.browser_launch_timeout_s,
                    )
                    logger.info("[Playwright] Browser launched successfully (shared)")
                    return self._browser
                except Exception as e:
                    await self._teardown()
                    if is_missing_browser_error(e):
                        logger.error(f"[Playwright] Browser binary missing: {e}")
                        raise BrowserEnvironmentException(str(e).splitlines()[0] if str(e) else type(e).__name__) from e
                    last_err = e
                    logger.error(
                        f"[Playwright] Failed to launch browser (attempt {attempt}/{self._max_retries}): "
                        f"{type(e).__name__}: {e}"
                    )
                    if attempt < self._max_retries:
                        wait_time = min(2.0 * attempt, 10.0)
                        logger.info(f"[Playwright] Waiting {wait_time:.1f}s before retry...")
                        await asyncio.sleep(wait_time)

            raise BrowserException(f"[Playwright] Browser launch failed after retries: {last_err}")

    @asynccontextmanager
    async def page(self, *, block_resources: bool = False) -> AsyncIterator[Page]:
        """요청 전용 컨텍스트/페이지. 성공/실패와 무관하게 닫힘"""
        browser = await self.start()
        context = await browser.new_context(
            user_agent=settings.crawler_user_agent,
            locale="en-US",
            extra_http_headers={"Accept-Language": settings.crawler_accept_language},
        )
        try:
            page = await context.new_page()
            await configure_page(page, block_resources=block_resources)
            yield page
        finally:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"[Playwright] Context close failed: {type(e).__name__}")

    async def close(self) -> None:
        async with self._lock:
            await self._teardown()

    async def _teardown(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception:
                pass
            self._browser = None
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception:
                pass
            self._playwright = None
