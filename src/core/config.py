"""
서버 설정: default.yaml + 환경 변수.

우선순위 (뒤가 이김):
    기본값 < default.yaml < 환경 변수 < CLI 인자

리스너(SOCKET/PORT)는 여기서 다루지 않는다 → src.core.listener
"""

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from src.domain.constants import CLACKS_VALUE, DEFAULT_SHUTDOWN_TIMEOUT
from src.domain.errors import ErrorCodes, FrontendError

PROJECT_ROOT = Path(__file__).parent.parent.parent
APP_DIR = Path(__file__).parent.parent / "app"

DEFAULT_CONFIG_PATH = PROJECT_ROOT / "default.yaml"
DEFAULT_TEMPLATES_DIR = APP_DIR / "templates"
DEFAULT_STATIC_DIR = APP_DIR / "static"

ENV_TEMPLATES_DIR = "TEMPLATES_DIR"
ENV_STATIC_DIR = "STATIC_DIR"
ENV_SHUTDOWN_TIMEOUT = "SHUTDOWN_TIMEOUT"
ENV_LOG_LEVEL = "LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """서버 실행 설정."""
    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    static_dir: Path = DEFAULT_STATIC_DIR
    shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT
    clacks_overhead: str = CLACKS_VALUE
    log_level: str = "INFO"

    def with_overrides(self, **overrides: Any) -> "Settings":
        """None이 아닌 값만 덮어쓴 사본."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "templates_dir" in values:
            values["templates_dir"] = _resolve_path(values["templates_dir"])
        if "static_dir" in values:
            values["static_dir"] = _resolve_path(values["static_dir"])
        if "shutdown_timeout" in values:
            values["shutdown_timeout"] = _parse_timeout(values["shutdown_timeout"])
        if "log_level" in values:
            values["log_level"] = _parse_log_level(values["log_level"])
        return replace(self, **values)


# =============================================================================
# Loading
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드. 파일이 없으면 빈 dict."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] | None = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontendError(
            ErrorCodes.CONFIG_INVALID,
            path=str(config_path),
            reason="top-level YAML value must be a mapping",
        )
    return data


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Settings 생성.

    Args:
        config_path: YAML 설정 파일 (None이면 프로젝트 루트 default.yaml)
        environ: 환경 변수 (None이면 os.environ)

    Returns:
        병합된 Settings

    Raises:
        FrontendError: CONFIG_INVALID
    """
    if environ is None:
        environ = os.environ

    config = load_config(config_path)
    paths = config.get("paths") or {}
    server = config.get("server") or {}
    logging_conf = config.get("logging") or {}

    settings = Settings().with_overrides(
        templates_dir=paths.get("templates_dir"),
        static_dir=paths.get("static_dir"),
        shutdown_timeout=server.get("shutdown_timeout"),
        clacks_overhead=server.get("clacks_overhead"),
        log_level=logging_conf.get("level"),
    )

    return settings.with_overrides(
        templates_dir=environ.get(ENV_TEMPLATES_DIR),
        static_dir=environ.get(ENV_STATIC_DIR),
        shutdown_timeout=environ.get(ENV_SHUTDOWN_TIMEOUT),
        log_level=environ.get(ENV_LOG_LEVEL),
    )


# =============================================================================
# Helpers
# =============================================================================


def _resolve_path(value: str | Path) -> Path:
    """상대 경로는 현재 작업 디렉토리 기준."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise FrontendError(
            ErrorCodes.CONFIG_INVALID,
            field="shutdown_timeout",
            value=value,
        ) from e

    if not math.isfinite(timeout):
        raise FrontendError(
            ErrorCodes.CONFIG_INVALID,
            field="shutdown_timeout",
            value=value,
            reason="must be a finite number",
        )
    if timeout < 0:
        raise FrontendError(
            ErrorCodes.CONFIG_INVALID,
            field="shutdown_timeout",
            value=value,
            reason="must not be negative",
        )
    return timeout


def _parse_log_level(value: Any) -> str:
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise FrontendError(
            ErrorCodes.CONFIG_INVALID,
            field="log_level",
            value=value,
            reason=f"must be one of {', '.join(LOG_LEVELS)}",
        )
    return level
