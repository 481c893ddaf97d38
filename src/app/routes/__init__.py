"""
FastAPI Routes.

페이지 라우트 (HTML) + 미구현 prefix 스텁
"""

from . import pages, stubs

__all__ = ["pages", "stubs"]
