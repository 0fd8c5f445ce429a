"""
Domain Constants: 애플리케이션 전역 상수.

설정 기본값, 헤더 이름, 뷰 디렉터리 규칙 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Environment Profile (환경 프로파일)
# =============================================================================
# default.yaml 참조:
# env:
#   active: dev
#   dev: {...}
#   prod: {...}

DEFAULT_ENV_PROFILE = "dev"
PROFILE_PREFIX = "env."

# =============================================================================
# Server Defaults (서버 기본값)
# =============================================================================

DEFAULT_HTTP_PORT = "8080"
DEFAULT_READ_TIMEOUT = "90s"
DEFAULT_WRITE_TIMEOUT = "90s"
DEFAULT_GRACE_SHUTDOWN = "60s"
DEFAULT_MAX_HEADER_BYTES = "1mb"
DEFAULT_MAX_BODY_SIZE = "5mb"
DEFAULT_GZIP_LEVEL = 4

# 타임아웃 값에 허용되는 단위 (초, 분)
ALLOWED_TIMEOUT_UNITS = ("s", "m")

# JSON hijacking 방지 prefix
DEFAULT_SECURE_JSON_PREFIX = ")]}',\n"

# 이 타입의 앱은 HTTP 렌더링 관련 설정을 해석하지 않음
APP_TYPE_WEBSOCKET = "websocket"

# =============================================================================
# HTTP Headers (헤더 이름)
# =============================================================================

HEADER_X_REQUEST_ID = "X-Request-Id"
HEADER_SERVER = "Server"
HEADER_X_FRAME_OPTIONS = "X-Frame-Options"
HEADER_X_CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"
HEADER_X_XSS_PROTECTION = "X-XSS-Protection"
HEADER_REFERRER_POLICY = "Referrer-Policy"
HEADER_STRICT_TRANSPORT_SECURITY = "Strict-Transport-Security"

# =============================================================================
# Views Directory Structure (뷰 디렉터리 구조)
# =============================================================================
# views/
# ├── layouts/     # 래퍼 템플릿 (master.html → 레이아웃 "master")
# └── pages/       # 페이지 디렉터리 (하위 디렉터리 포함)
#     └── app/
#         └── index.html

VIEWS_LAYOUTS_DIR = "layouts"
VIEWS_PAGES_DIR = "pages"
DEFAULT_TEMPLATE_EXT = ".html"
