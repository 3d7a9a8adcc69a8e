"""설정 관리 - 환경 변수 로드 및 검증"""
from typing import Literal
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 배포 모드: http(curl_cffi + 미러) / browser(Playwright 렌더링)
    # 두 모드는 동시에 쓰지 않습니다.
    chords_fetch_mode: Literal["http", "browser"] = "http"

    # 캐시
    resolve_cache_ttl_s: int = 300  # 5분
    health_cache_ttl_s: int = 15
    health_timeout_s: float = 6.0

    # 크롤러 공통 헤더
    crawler_user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    )
    crawler_accept_language: str = "en-US,en;q=0.9"
    crawler_http_impersonate: str = "chrome110"
    crawler_http_max_clients: int = 20
    crawler_max_retries: int = 3

    # 검색 엔진 요청 타임아웃
    provider_timeout_s: float = 12.0
    mirror_search_timeout_s: float = 18.0
    mirror_search_limit: int = 8

    # 대상 페이지 fetch
    page_timeout_s: float = 15.0
    page_max_redirects: int = 5
    max_embed_candidates: int = 5

    # 텍스트 미러 (r.jina.ai)
    mirror_enabled: bool = True
    mirror_base_url: str = "https://r.jina.ai/"
    mirror_page_timeout_s: float = 20.0

    # Playwright
    browser_navigation_timeout_s: float = 30.0
    browser_settle_ms: int = 1200
    browser_launch_timeout_s: float = 25.0
    # 앱 시작 시 브라우저를 미리 띄울지 여부 (기본: 첫 요청에서 lazy-launch)
    browser_warmup: bool = False

    # API
    api_title: str = "Chord Sheet Finder"
    api_version: str = "1.0.0"
    api_description: str = "검색 결과 중 첫 번째 코드 악보 페이지를 찾아 iframe에 넣을 수 있게 정리합니다."

    # 로깅
    log_level: str = "INFO"

    @field_validator("resolve_cache_ttl_s", "health_cache_ttl_s")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache ttl must be positive")
        return v

    @field_validator(
        "health_timeout_s",
        "provider_timeout_s",
        "mirror_search_timeout_s",
        "page_timeout_s",
        "mirror_page_timeout_s",
        "browser_navigation_timeout_s",
        "browser_launch_timeout_s",
    )
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("page_max_redirects", "browser_settle_ms")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must be >= 0")
        return v

    @field_validator("max_embed_candidates", "mirror_search_limit", "crawler_max_retries")
    @classmethod
    def validate_counts(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("counts must be positive")
        return v

    @field_validator("mirror_base_url")
    @classmethod
    def validate_mirror_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("mirror_base_url must be an http(s) URL")
        return v if v.endswith("/") else v + "/"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
