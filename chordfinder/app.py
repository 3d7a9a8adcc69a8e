"""FastAPI 앱 팩토리"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from chordfinder.core.config import settings
from chordfinder.core.exceptions import BrowserException
from chordfinder.core.logging import logger
from chordfinder.crawlers.http_client import get_shared_http_client, shutdown_shared_http_client
from chordfinder.crawlers.playwright import BrowserPool
from chordfinder.services.chords_service import ChordsService, build_chords_service
from chordfinder.api import health_router, chords_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    logger.info(f"Starting application (mode={settings.chords_fetch_mode})...")

    pool: Optional[BrowserPool] = None
    if getattr(app.state, "chords_service", None) is None:
        if settings.chords_fetch_mode == "browser":
            pool = BrowserPool()
            if settings.browser_warmup:
                try:
                    await pool.start()
                except BrowserException as e:
                    # 첫 요청에서 다시 시도하고 그때 오류 페이지로 안내
                    logger.error(f"[Playwright] Warmup failed: {e}")
        app.state.chords_service = build_chords_service(
            settings.chords_fetch_mode,
            client=get_shared_http_client(),
            pool=pool,
        )
    app.state.browser_pool = pool

    logger.info("Application started")
    yield
    logger.info("Shutting down application...")
    if pool is not None:
        await pool.close()
    await shutdown_shared_http_client()


def create_app(chords_service: Optional[ChordsService] = None) -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Args:
        chords_service: 테스트 등에서 주입할 서비스 (없으면 lifespan에서 설정 기반으로 구성)

    Returns:
        FastAPI 앱 인스턴스
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )
    app.state.chords_service = chords_service

    # CORS (iframe 호스트가 어디든 호출 가능)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(chords_router)

    return app

# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
