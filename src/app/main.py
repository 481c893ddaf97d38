"""
FastAPI 애플리케이션 팩토리.

실행:
- 기본: uv run python -m src.app
- uvicorn 직접: uv run uvicorn src.app.main:create_app --factory
  (이 경우 SOCKET/PORT, SIGHUP reload는 동작하지 않음)
"""

import random
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.routes import pages, stubs
from src.core.config import Settings, load_settings
from src.domain.constants import CLACKS_HEADER
from src.domain.styles import STYLES, StyleSet
from src.render.templateset import TemplateSet


def create_app(
    settings: Settings | None = None,
    template_set: TemplateSet | None = None,
    styles: StyleSet | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    """
    앱 생성.

    Args:
        settings: 서버 설정 (None이면 load_settings())
        template_set: 미리 로드한 템플릿 (None이면 settings.templates_dir에서 로드)
        styles: 404 스타일 목록 (None이면 STYLES)
        rng: 404 스타일 선택용 난수 소스 (None이면 시스템 시드)

    Returns:
        FastAPI 앱
    """
    if settings is None:
        settings = load_settings()
    if template_set is None:
        template_set = TemplateSet.load(settings.templates_dir)

    # /docs, /openapi.json 등은 노출하지 않음 → 404 페이지로
    app = FastAPI(
        title="HTML Front-end",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.settings = settings
    app.state.templates = template_set
    app.state.styles = styles if styles is not None else STYLES
    app.state.rng = rng if rng is not None else random.Random()

    # =========================================================================
    # Middleware
    # =========================================================================

    @app.middleware("http")
    async def clacks_overhead(request: Request, call_next: Any) -> Response:
        response: Response = await call_next(request)
        response.headers[CLACKS_HEADER] = settings.clacks_overhead
        return response

    # =========================================================================
    # Error pages
    # =========================================================================

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 404:
            return pages.not_found_page(request)
        # 405 등은 FastAPI 기본 처리
        return await http_exception_handler(request, exc)

    # =========================================================================
    # Routes
    # =========================================================================

    if settings.static_dir.exists():
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    app.include_router(pages.router, tags=["Pages"])
    app.include_router(stubs.router, tags=["Stubs"])

    return app
