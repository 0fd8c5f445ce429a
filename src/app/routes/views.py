"""
Views Routes: 페이지 렌더링 + 뷰 재로드.

- GET / → 기본 레이아웃의 app/index.html
- POST /api/views/reload → 뷰 재로드 (hot_reload일 때만)
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse

from src.app.rendering import render_view
from src.domain.errors import ViewError

logger = logging.getLogger(__name__)

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints

DEFAULT_LAYOUT = "master"


# =============================================================================
# Page Routes (HTML)
# =============================================================================

@router.get("/", response_class=HTMLResponse)
async def index_page(request: Request) -> HTMLResponse:
    """홈 페이지."""
    settings = request.app.state.settings
    return render_view(
        request,
        DEFAULT_LAYOUT,
        "pages/app",
        "index.html",
        {"title": "Home", "env_profile": settings.env_profile},
    )


# =============================================================================
# API Routes
# =============================================================================

@api_router.post("/reload", response_model=None)
async def reload_views(request: Request) -> dict[str, Any] | JSONResponse:
    """
    뷰 재로드.

    hot_reload가 꺼져 있으면 404.
    일부 디렉터리 실패 시 500 + 에러 정보 (성공한 레이아웃은 계속 사용 가능).
    """
    settings = request.app.state.settings
    if not settings.hot_reload:
        raise HTTPException(status_code=404, detail="Not Found")

    engine = request.app.state.view_engine
    try:
        engine.reload()
    except ViewError as e:
        logger.error(f"View reload failed: {e}")
        return JSONResponse(status_code=500, content={"status": "error", **e.to_dict()})

    return {"status": "ok", "layouts": engine.layout_names()}
