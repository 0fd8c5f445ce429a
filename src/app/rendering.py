"""
뷰 렌더링: TemplateEngine 조회 → HTMLResponse.
"""

import logging
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import HTMLResponse

from src.domain.errors import ErrorCodes
from src.views.engine import TemplateEngine

logger = logging.getLogger(__name__)


def render_view(
    request: Request,
    layout: str,
    path: str,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    """
    뷰 렌더링.

    Args:
        request: 현재 요청 (템플릿 컨텍스트에 request, request_id로 노출)
        layout: 레이아웃 이름
        path: 페이지 디렉터리 경로 (예: "pages/app")
        name: 템플릿 파일명
        context: 템플릿 변수

    Raises:
        HTTPException: 404 (TEMPLATE_NOT_FOUND)
    """
    engine: TemplateEngine = request.app.state.view_engine
    template = engine.get(layout, path, name)
    if template is None:
        logger.warning(f"View not found: layout={layout}, path={path}, name={name}")
        raise HTTPException(
            status_code=404,
            detail={
                "code": ErrorCodes.TEMPLATE_NOT_FOUND,
                "message": f"View not found: {layout}/{path}/{name}",
            },
        )

    content = template.render(
        {
            "request": request,
            "request_id": getattr(request.state, "request_id", ""),
            **(context or {}),
        }
    )
    return HTMLResponse(content=content, status_code=status_code)
