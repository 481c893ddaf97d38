"""
Pytest fixtures for the front-end tests.

구성:
- 임시 templates/ (layouts + includes), static/
- Settings / FastAPI 앱 / TestClient
"""

import random
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.app.main import create_app
from src.core.config import Settings
from src.domain.styles import Style, StyleSet

# =============================================================================
# Template Sources
# =============================================================================

BASE_HTML = """<!DOCTYPE html>
<html>
<head>
<title>{% block title %}{% endblock %}</title>
{% block stylesheets %}{% endblock %}
</head>
<body>{% block content %}{% endblock %}</body>
</html>
"""

INDEX_HTML = """{% extends "base.html" %}
{% block title %}Home{% endblock %}
{% block content %}<h1>home page</h1>{% endblock %}
"""

NOT_FOUND_HTML = """{% extends "base.html" %}
{% block title %}Not found{% endblock %}
{% block stylesheets %}{% for href in style.stylesheets %}<link rel="stylesheet" href="{{ href }}">{% endfor %}{% endblock %}
{% block content %}<h1>{{ style.headline }}</h1><p>{{ style.blurb }}</p>{% endblock %}
"""


def write_templates(root: Path, layouts: dict[str, str], includes: dict[str, str]) -> Path:
    """layouts/, includes/ 구조로 템플릿 파일 생성."""
    (root / "layouts").mkdir(parents=True, exist_ok=True)
    (root / "includes").mkdir(parents=True, exist_ok=True)
    for name, source in layouts.items():
        (root / "layouts" / name).write_text(source, encoding="utf-8")
    for name, source in includes.items():
        (root / "includes" / name).write_text(source, encoding="utf-8")
    return root


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """index.html + 404.html + base.html 을 가진 임시 templates/."""
    return write_templates(
        tmp_path / "templates",
        layouts={"index.html": INDEX_HTML, "404.html": NOT_FOUND_HTML},
        includes={"base.html": BASE_HTML},
    )


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """css 파일 하나를 가진 임시 static/."""
    static = tmp_path / "static"
    (static / "css").mkdir(parents=True)
    (static / "css" / "site.css").write_text("body { color: red; }\n", encoding="utf-8")
    return static


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def settings(templates_dir: Path, static_dir: Path) -> Settings:
    """테스트용 설정 (shutdown 빠르게)."""
    return Settings(
        templates_dir=templates_dir,
        static_dir=static_dir,
        shutdown_timeout=1.0,
    )


@pytest.fixture
def styles() -> StyleSet:
    """결정론적 404 스타일."""
    return StyleSet([
        Style(stylesheets=["/static/css/a.css"], headline="Oops A", blurb="blurb a"),
        Style(stylesheets=["/static/css/b.css"], headline="Oops B", blurb="blurb b"),
    ])


@pytest.fixture
def app(settings: Settings, styles: StyleSet) -> FastAPI:
    """테스트용 FastAPI 앱."""
    return create_app(settings, styles=styles, rng=random.Random(1234))


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """테스트 클라이언트 (리다이렉트 자동 추적 안 함)."""
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
