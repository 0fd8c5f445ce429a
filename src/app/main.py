"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run python -m src.app.main (Settings 기반 uvicorn 설정)

시작 순서:
1. .env 로드 → default.yaml 로드 → APP__ 환경 변수 오버라이드
2. Settings 해석 (실패 시 시작 중단)
3. lifespan에서 뷰 엔진 로드 (실패한 디렉터리는 로그, 나머지는 사용)
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.app.middleware import install_middleware
from src.app.routes import views
from src.app.server import build_server_config
from src.config.loader import apply_env_overrides, load_config
from src.core.logging import setup_logging_from_config
from src.domain.errors import ViewError
from src.settings.settings import Settings
from src.views.engine import TemplateEngine

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 뷰 엔진 초기화/로드
    종료 시: 리소스 정리
    """
    # Startup
    engine: TemplateEngine = app.state.view_engine
    engine.init(app.state.config, app.state.views_dir)
    try:
        engine.load()
    except ViewError as e:
        logger.error(f"View engine load failed: {e}")

    app.state.settings.initialized = True

    yield

    # Shutdown
    app.state.settings.initialized = False


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    config_path: Path | None = None,
    views_dir: Path | None = None,
    hot_reload: bool = False,
) -> FastAPI:
    """
    앱 생성.

    Args:
        config_path: 설정 파일 (None이면 프로젝트 루트의 default.yaml)
        views_dir: 뷰 루트 (None이면 프로젝트 루트의 views/)
        hot_reload: 뷰 재로드 API 활성화

    Raises:
        SettingsError, ConfigError: 잘못된 설정 (시작 중단)
    """
    config = load_config(config_path)
    apply_env_overrides(config)

    settings = Settings()
    settings.refresh(config)
    settings.hot_reload = hot_reload
    settings.pid = os.getpid()
    settings.base_dir = str(PROJECT_ROOT)
    logger.info(f"Settings resolved (profile={settings.env_profile})")

    app = FastAPI(
        title="Viewkit",
        description="Layout/page view rendering with typed HTTP settings",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.settings = settings
    app.state.views_dir = views_dir if views_dir is not None else PROJECT_ROOT / "views"
    app.state.view_engine = TemplateEngine()

    install_middleware(app, settings)

    # Static files (CSS, JS)
    static_dir = PROJECT_ROOT / "static"
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    # Routes
    app.include_router(views.router, prefix="", tags=["Views"])
    app.include_router(views.api_router, prefix="/api/views", tags=["Views API"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok", "profile": settings.env_profile}

    return app


# =============================================================================
# App Instance
# =============================================================================

load_dotenv()
app = create_app(hot_reload=os.getenv("APP_HOT_RELOAD", "").lower() == "true")


def run() -> None:
    """Settings 기반으로 uvicorn 실행."""
    setup_logging_from_config(app.state.config)
    server = uvicorn.Server(build_server_config(app, app.state.settings))
    server.run()


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    run()
