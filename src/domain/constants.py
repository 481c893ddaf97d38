"""
Domain Constants: 서버 전역 상수.

리스너 기본값, 템플릿 디렉토리 구조, 응답 헤더 등.
"""

# =============================================================================
# Listener (환경 변수 기반 리스너 선택)
# =============================================================================
# SOCKET=<path> → unix 소켓
# PORT=<n>      → tcp 0.0.0.0:<n>
# 둘 다 없음    → tcp 127.0.0.1:5000

ENV_SOCKET = "SOCKET"
ENV_PORT = "PORT"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
ALL_INTERFACES = "0.0.0.0"

# =============================================================================
# Template Directory Structure (템플릿 디렉토리 구조)
# =============================================================================
# templates/
# ├── layouts/    # 페이지 (index.html, 404.html) → 이름으로 조회
# └── includes/   # 공용 레이아웃 + 조각 (base.html 등)

TEMPLATE_LAYOUTS_DIR = "layouts"
TEMPLATE_INCLUDES_DIR = "includes"
TEMPLATE_GLOB = "*.html"

INDEX_TEMPLATE = "index.html"
NOT_FOUND_TEMPLATE = "404.html"

# =============================================================================
# HTTP
# =============================================================================

CLACKS_HEADER = "X-Clacks-Overhead"
CLACKS_VALUE = "GNU Terry Pratchett"

# 아직 구현되지 않은 라우트 prefix (슬래시 없이 요청 시 301로 보정)
STUB_PREFIXES = ("/auth", "/v2")

# 스텁 라우트가 받는 메서드 (전부)
ANY_METHODS = [
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "HEAD",
    "OPTIONS",
    "DELETE",
    "CONNECT",
    "TRACE",
]

# =============================================================================
# Shutdown
# =============================================================================

DEFAULT_SHUTDOWN_TIMEOUT = 5.0
