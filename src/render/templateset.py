"""
HTML 템플릿 세트: layouts/*.html + includes/*.html.

규칙:
- layout 하나마다 "모든 includes + 해당 layout"으로 독립 컴파일
- 저장 키 = layout 파일명 (예: index.html, 404.html)
- 하나라도 문법 오류 / 없는 템플릿 참조 → 전체 로드 실패 (부분 세트 금지)
- 로드 시점의 소스를 메모리에 고정 → 파일을 고쳐도 reload 전까지 반영 안 됨

렌더링은 항상 이름으로 찾은 layout에서 시작한다.
layout은 보통 {% extends "base.html" %} 로 includes의 공용 레이아웃을 상속.
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import (
    DictLoader,
    Environment,
    Template,
    TemplateSyntaxError,
    meta,
    select_autoescape,
)

from src.domain.constants import (
    TEMPLATE_GLOB,
    TEMPLATE_INCLUDES_DIR,
    TEMPLATE_LAYOUTS_DIR,
)
from src.domain.errors import ErrorCodes, FrontendError

logger = logging.getLogger(__name__)


class TemplateSet:
    """layout 이름 → 컴파일된 Jinja2 템플릿."""

    def __init__(
        self,
        store: dict[str, Template] | None = None,
        source_dir: Path | None = None,
    ) -> None:
        self.store = dict(store or {})
        self.source_dir = source_dir

    def __len__(self) -> int:
        return len(self.store)

    def __contains__(self, name: object) -> bool:
        return name in self.store

    @property
    def names(self) -> list[str]:
        return sorted(self.store)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, templates_dir: Path) -> "TemplateSet":
        """
        디렉토리에서 템플릿 세트 컴파일.

        Args:
            templates_dir: layouts/, includes/ 를 가진 디렉토리

        Returns:
            TemplateSet (layout이 없으면 빈 세트)

        Raises:
            FrontendError: TEMPLATES_DIR_MISSING, TEMPLATE_COMPILE_FAILED
        """
        templates_dir = Path(templates_dir)
        if not templates_dir.is_dir():
            raise FrontendError(
                ErrorCodes.TEMPLATES_DIR_MISSING,
                path=str(templates_dir),
            )

        layouts = sorted((templates_dir / TEMPLATE_LAYOUTS_DIR).glob(TEMPLATE_GLOB))
        includes = sorted((templates_dir / TEMPLATE_INCLUDES_DIR).glob(TEMPLATE_GLOB))
        include_sources = {path.name: _read_source(path) for path in includes}

        store: dict[str, Template] = {}
        for layout in layouts:
            # layout이 같은 이름의 include를 가린다
            sources = {**include_sources, layout.name: _read_source(layout)}
            env = _build_environment(sources)
            store[layout.name] = _compile(env, sources, layout.name)

        template_set = cls(store, source_dir=templates_dir)
        template_set.log_summary()
        return template_set

    def log_summary(self) -> None:
        logger.info(f"found {len(self)} templates")
        for name in self.names:
            logger.info(f"found template {name}")

    # -------------------------------------------------------------------------
    # Lookup / Render
    # -------------------------------------------------------------------------

    def locate(self, name: str) -> Template:
        """
        이름으로 layout 조회.

        Raises:
            FrontendError: TEMPLATE_NOT_FOUND
        """
        try:
            return self.store[name]
        except KeyError:
            raise FrontendError(
                ErrorCodes.TEMPLATE_NOT_FOUND,
                message=f"template {name} does not exist",
            ) from None

    def render(self, name: str, context: dict[str, Any] | None = None) -> str:
        """layout 렌더링 → HTML 문자열."""
        return self.locate(name).render(**(context or {}))


# =============================================================================
# Internal
# =============================================================================


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FrontendError(
            ErrorCodes.TEMPLATE_COMPILE_FAILED,
            template=path.name,
            reason=str(e),
        ) from e


def _build_environment(sources: dict[str, str]) -> Environment:
    return Environment(
        loader=DictLoader(sources),
        autoescape=select_autoescape(["html", "htm", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _compile(env: Environment, sources: dict[str, str], name: str) -> Template:
    """
    layout 컴파일 + 모든 includes 문법 검사 + 참조 검사.

    정적으로 알 수 있는 {% extends %} / {% include %} 대상이
    세트 안에 없으면 렌더 시점이 아니라 로드 시점에 실패한다.
    """
    for source_name, source in sources.items():
        try:
            ast = env.parse(source, name=source_name)
        except TemplateSyntaxError as e:
            raise FrontendError(
                ErrorCodes.TEMPLATE_COMPILE_FAILED,
                template=source_name,
                line=e.lineno,
                reason=e.message,
            ) from e

        for referenced in meta.find_referenced_templates(ast):
            if referenced is not None and referenced not in sources:
                raise FrontendError(
                    ErrorCodes.TEMPLATE_COMPILE_FAILED,
                    template=source_name,
                    reason=f"references missing template {referenced}",
                )

    return env.get_template(name)
