"""
404 페이지 스타일.

not-found 응답마다 STYLES 중 하나를 무작위로 골라 렌더링한다.
"""

import random
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Style:
    """404 페이지 한 벌의 스타일 (스타일시트 + 문구)."""
    stylesheets: list[str] = field(default_factory=list)
    headline: str = ""
    blurb: str = ""


class StyleSet:
    """스타일 목록. 비어 있어도 random_style()은 실패하지 않는다."""

    def __init__(self, styles: list[Style] | None = None) -> None:
        self.styles = list(styles or [])

    def __len__(self) -> int:
        return len(self.styles)

    def random_style(self, rng: random.Random | None = None) -> Style:
        """
        균등 확률로 스타일 하나 선택.

        Args:
            rng: 난수 소스 (None이면 모듈 전역 random)

        Returns:
            선택된 Style, 목록이 비어 있으면 빈 Style()
        """
        if not self.styles:
            return Style()

        chooser = rng if rng is not None else random
        return chooser.choice(self.styles)


STYLES = StyleSet([
    Style(
        stylesheets=[
            "https://fonts.googleapis.com/css?family=Montserrat:200,400,700",
            "/static/css/404-04.css",
        ],
        headline="Oops!",
        blurb="The page cannot be found",
    ),
])
