"""Pydantic 스키마 정의 (API 응답)"""
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    ok: bool = Field(True, description="서버 동작 여부")
    ts: int = Field(..., description="서버 시각 (epoch ms)")


class ResolveResponse(BaseModel):
    """검색어 → 첫 번째 결과 URL"""
    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., description="요청 검색어")
    first_result_url: str = Field(..., alias="firstResultUrl", description="필터를 통과한 최상위 URL")
    candidates: List[str] = Field(default_factory=list, description="점수 순 상위 후보 (최대 5개)")


class ErrorResponse(BaseModel):
    """검색어 누락 등 요청 오류"""
    error: str = Field(..., description="오류 메시지")


class ResolveErrorResponse(ErrorResponse):
    """해석 실패 (502)"""
    query: str = Field(..., description="요청 검색어")
