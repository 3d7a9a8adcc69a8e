"""헬스 체크 엔드포인트"""
import time

from fastapi import APIRouter, Response

from chordfinder.schemas.chords_schema import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(response: Response):
    """
    헬스 체크 엔드포인트

    폴링 클라이언트가 주기적으로 호출하므로 외부 의존성은 확인하지 않습니다.
    """
    response.headers["Cache-Control"] = "no-store"
    return HealthResponse(ok=True, ts=int(time.time() * 1000))
