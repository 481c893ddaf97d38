"""
Render layer: HTML 템플릿.

역할:
- layouts/ + includes/ → 컴파일된 템플릿 세트
- Jinja2 (autoescape)
"""

from .templateset import TemplateSet

__all__ = [
    "TemplateSet",
]
