"""
Page Routes: 서버 렌더링 HTML.

- GET /     → index.html
- 그 외 경로 → 404.html (무작위 스타일)

템플릿 세트는 요청마다 app.state.templates 에서 읽는다.
SIGHUP reload가 이 속성만 교체하므로 진행 중인 요청은 이전 세트로 끝난다.
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from src.domain.constants import INDEX_TEMPLATE, NOT_FOUND_TEMPLATE
from src.render.templateset import TemplateSet

router = APIRouter()


def render_page(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    """현재 템플릿 세트로 layout 렌더링."""
    templates: TemplateSet = request.app.state.templates
    return HTMLResponse(
        content=templates.render(name, context),
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """홈 페이지."""
    return render_page(request, INDEX_TEMPLATE)


def not_found_page(request: Request) -> HTMLResponse:
    """404 페이지. 매 요청마다 스타일을 새로 고른다."""
    style = request.app.state.styles.random_style(request.app.state.rng)
    return render_page(
        request,
        NOT_FOUND_TEMPLATE,
        {"style": style},
        status_code=404,
    )
