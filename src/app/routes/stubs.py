"""
Stub Routes: 아직 구현되지 않은 prefix.

- ANY /auth, /v2   → 301, 끝에 "/" 붙인 경로로
- ANY /auth/, /v2/ → 501 (본문 없음)

/auth/login 처럼 더 깊은 경로는 여기서 받지 않는다 → 404 페이지.
"""

from fastapi import APIRouter, Request, Response
from fastapi.responses import RedirectResponse

from src.domain.constants import ANY_METHODS, STUB_PREFIXES

router = APIRouter()


async def append_slash(request: Request) -> RedirectResponse:
    """경로 끝에 슬래시 추가 후 영구 리다이렉트 (query string은 버린다)."""
    return RedirectResponse(url=request.url.path + "/", status_code=301)


async def not_implemented() -> Response:
    """501 Not Implemented."""
    return Response(status_code=501)


for prefix in STUB_PREFIXES:
    router.add_api_route(
        prefix,
        append_slash,
        methods=ANY_METHODS,
        include_in_schema=False,
    )
    router.add_api_route(
        prefix + "/",
        not_implemented,
        methods=ANY_METHODS,
        include_in_schema=False,
    )
