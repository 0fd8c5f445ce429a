"""
Views layer: 레이아웃/페이지 템플릿 엔진.

주의: 폴더 구분
- src/views/ → 코드 (이 모듈)
- views/ (루트) → 템플릿 파일 (layouts/, pages/)
"""

from .engine import (
    TEMPLATE_FUNCS,
    TemplateEngine,
    TemplateEngineBase,
    Templates,
    TemplateSet,
    add_template_func,
)

__all__ = [
    "TemplateEngine",
    "TemplateEngineBase",
    "Templates",
    "TemplateSet",
    "TEMPLATE_FUNCS",
    "add_template_func",
]
