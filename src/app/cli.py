"""
cli.py - 서버 실행 진입점

순서:
1. 로깅 설정
2. 설정 로드 (default.yaml < 환경 변수 < CLI 인자)
3. 템플릿 컴파일 (실패 시 종료)
4. 리스너 열기 (SOCKET / PORT, 실패 시 종료)
5. 서버 실행 → 신호 대기 → graceful shutdown

사용법:
    # 기본 (tcp://127.0.0.1:5000)
    uv run python -m src.app

    # 포트 지정
    PORT=8080 uv run python -m src.app

    # unix 소켓 (예: 리버스 프록시 뒤)
    SOCKET=/run/app/app.sock uv run python -m src.app

    # 실행 중 템플릿 재로드
    kill -HUP <pid>
"""

import argparse
import logging
from pathlib import Path

from src.app.main import create_app
from src.app.server import serve
from src.core.config import LOG_LEVELS, load_settings
from src.core.listener import open_listener, resolve_listener
from src.domain.errors import FrontendError
from src.render.templateset import TemplateSet

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger().setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frontend-serve",
        description="Serve server-rendered HTML templates and static assets.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML 설정 파일 (기본: 프로젝트 루트 default.yaml)",
    )
    parser.add_argument("--templates-dir", type=Path, default=None)
    parser.add_argument("--static-dir", type=Path, default=None)
    parser.add_argument(
        "--shutdown-timeout",
        type=float,
        default=None,
        help="graceful shutdown 대기 시간(초)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        type=str.upper,
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or "INFO")

    try:
        settings = load_settings(args.config).with_overrides(
            templates_dir=args.templates_dir,
            static_dir=args.static_dir,
            shutdown_timeout=args.shutdown_timeout,
            log_level=args.log_level,
        )
    except FrontendError as e:
        logger.critical(f"unable to load configuration: {e}")
        return 1
    configure_logging(settings.log_level)

    logger.info(f"searching for templates in {str(settings.templates_dir)!r}")
    try:
        template_set = TemplateSet.load(settings.templates_dir)
    except FrontendError as e:
        logger.critical(f"unable to compile templates: {e}")
        return 1

    try:
        listener = open_listener(resolve_listener())
    except FrontendError as e:
        logger.critical(f"unable to open listener: {e}")
        return 1

    app = create_app(settings, template_set)
    try:
        serve(app, listener, settings)
    except FrontendError as e:
        logger.critical(f"{e}")
        return 1
    return 0
