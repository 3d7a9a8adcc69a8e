"""Chords Routes - HTTP Layer

HTTP Layer는 ChordsService로 요청을 위임하고 결과/예외를 응답으로 변환하는 역할만 합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse

from chordfinder.core.exceptions import (
    BrowserEnvironmentException,
    ChordFinderException,
    InvalidQueryException,
    NoResultFoundException,
)
from chordfinder.core.logging import logger, sanitize_for_log
from chordfinder.schemas.chords_schema import ResolveResponse
from chordfinder.services.chords_service import ChordsService
from chordfinder.utils.text_utils import escape_html, normalize_query

router = APIRouter(prefix="/api/chords", tags=["chords"])

NO_STORE = {"Cache-Control": "no-store"}
MAX_CANDIDATES_IN_RESPONSE = 5


def get_chords_service(request: Request) -> ChordsService:
    """lifespan에서 만든 ChordsService"""
    return request.app.state.chords_service


def _error_message(error: Exception) -> str:
    if isinstance(error, BrowserEnvironmentException):
        return f"{error.message}. {error.remediation}"
    if isinstance(error, ChordFinderException):
        return error.message
    return "Unknown error"


def render_error_page(message: str, headline: str = "Could not load the chords page") -> str:
    return (
        "<!doctype html>"
        "<html><head><meta charset=\"utf-8\"><title>Chords Load Error</title></head>"
        "<body style=\"font-family:system-ui,sans-serif;background:#111;color:#eee;padding:20px\">"
        f"<h2>{escape_html(headline)}</h2>"
        f"<p>{escape_html(message)}</p>"
        "</body></html>"
    )


@router.get("/resolve", response_model=ResolveResponse)
async def resolve_chords(
    query: Optional[str] = None,
    service: ChordsService = Depends(get_chords_service),
):
    """검색어 → 첫 번째 코드 악보 URL"""
    q = normalize_query(query)
    if not q:
        return JSONResponse(status_code=400, content={"error": "Missing query"}, headers=NO_STORE)

    try:
        result = await service.resolve(q)
    except InvalidQueryException:
        return JSONResponse(status_code=400, content={"error": "Missing query"}, headers=NO_STORE)
    except ChordFinderException as e:
        level = logger.info if isinstance(e, NoResultFoundException) else logger.warning
        level(f"[API] Resolve failed: query='{sanitize_for_log(q)}', error={e}")
        return JSONResponse(status_code=502, content={"query": q, "error": _error_message(e)}, headers=NO_STORE)
    except Exception as e:
        logger.error(f"[API] Resolve crashed: query='{sanitize_for_log(q)}', error={type(e).__name__}", exc_info=True)
        return JSONResponse(status_code=502, content={"query": q, "error": _error_message(e)}, headers=NO_STORE)

    body = ResolveResponse(
        query=q,
        first_result_url=result.chosen_url,
        candidates=result.top_candidates(MAX_CANDIDATES_IN_RESPONSE),
    )
    return JSONResponse(content=body.model_dump(by_alias=True), headers=NO_STORE)


@router.get("/embedded", response_class=HTMLResponse)
async def embedded_chords(
    query: Optional[str] = None,
    service: ChordsService = Depends(get_chords_service),
):
    """검색어 → iframe에 바로 넣을 수 있는 정리된 HTML"""
    q = normalize_query(query)
    if not q:
        return HTMLResponse(render_error_page("Missing query", headline="Missing query"), status_code=400, headers=NO_STORE)

    try:
        doc = await service.embedded(q)
    except InvalidQueryException:
        return HTMLResponse(render_error_page("Missing query", headline="Missing query"), status_code=400, headers=NO_STORE)
    except ChordFinderException as e:
        logger.warning(f"[API] Embed failed: query='{sanitize_for_log(q)}', error={e}")
        return HTMLResponse(render_error_page(_error_message(e)), status_code=502, headers=NO_STORE)
    except Exception as e:
        logger.error(f"[API] Embed crashed: query='{sanitize_for_log(q)}', error={type(e).__name__}", exc_info=True)
        return HTMLResponse(render_error_page(_error_message(e)), status_code=502, headers=NO_STORE)

    return HTMLResponse(doc.html, status_code=200, headers=NO_STORE)
