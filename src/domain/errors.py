"""
Error definitions for the front-end.

규칙:
- 조용한 실패 금지 → FrontendError로 명시적 실패
- 치명적 에러는 CLI에서 로그 후 종료 (exit 1)
- reload 실패는 치명적이지 않음 (이전 템플릿 유지)
"""

from typing import Any


class FrontendError(Exception):
    """
    서버 구성/기동/종료 중 발생하는 에러.

    raise 하는 곳 (CLI가 로그 후 exit 1):
    - 설정 값 오류 (CONFIG_INVALID)
    - 리스너 선택/바인드 실패 (LISTENER_*)
    - 기동 시 템플릿 로드 실패 (TEMPLATES_DIR_MISSING, TEMPLATE_COMPILE_FAILED)
    - 서버 스레드 기동 실패/비정상 종료, shutdown timeout 초과

    raise 하지 않고 로그만 남기는 곳:
    - SIGHUP 템플릿 재로드 실패 → 이전 세트로 계속 서비스

    요청 처리 중 TEMPLATE_NOT_FOUND 는 500 응답으로 끝난다.

    Usage:
        raise FrontendError("LISTENER_CONFLICT", socket="/run/app.sock", port="8080")
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Listener ===
    LISTENER_CONFLICT = "LISTENER_CONFLICT"  # SOCKET + PORT 동시 설정
    LISTENER_INVALID_PORT = "LISTENER_INVALID_PORT"
    LISTENER_OPEN_FAILED = "LISTENER_OPEN_FAILED"

    # === Templates ===
    TEMPLATES_DIR_MISSING = "TEMPLATES_DIR_MISSING"
    TEMPLATE_COMPILE_FAILED = "TEMPLATE_COMPILE_FAILED"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"

    # === Config ===
    CONFIG_INVALID = "CONFIG_INVALID"

    # === Server lifecycle ===
    SERVER_START_FAILED = "SERVER_START_FAILED"
    SERVER_CRASHED = "SERVER_CRASHED"  # 서버 스레드가 신호 없이 종료됨
    SHUTDOWN_TIMEOUT = "SHUTDOWN_TIMEOUT"
