"""
FastAPI Routes.

페이지 라우트 (HTML) + API 라우트 (REST)
"""

from . import views

__all__ = ["views"]
