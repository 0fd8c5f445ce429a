"""
Error definitions for config, settings and views.

규칙:
- 조용한 실패 금지 → 설정 오류는 AppError 하위 타입으로 명시적 실패
- 설정 오류는 시작 시 치명적 (startup 중단)
- 뷰 컴파일 오류는 디렉터리별 로그 후 하나의 ViewError로 집계
"""

from typing import Any


class AppError(Exception):
    """
    애플리케이션 공통 에러.

    Usage:
        raise SettingsError(
            ErrorCodes.INVALID_SIZE_UNIT,
            "'server.max_header_bytes' value is not a valid size unit",
            key="server.max_header_bytes",
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class ConfigError(AppError):
    """설정 소스(YAML, 프로파일, 타입 변환) 에러."""


class SettingsError(AppError):
    """설정값 해석/검증 실패."""


class ViewError(AppError):
    """뷰 디렉터리 탐색 또는 템플릿 컴파일 실패."""


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Config ===
    CONFIG_PARSE_FAILED = "CONFIG_PARSE_FAILED"
    CONFIG_INVALID_VALUE = "CONFIG_INVALID_VALUE"
    CONFIG_PROFILE_NOT_FOUND = "CONFIG_PROFILE_NOT_FOUND"

    # === Settings ===
    INVALID_TIME_UNIT = "INVALID_TIME_UNIT"
    INVALID_SIZE_UNIT = "INVALID_SIZE_UNIT"
    INVALID_GZIP_LEVEL = "INVALID_GZIP_LEVEL"
    INVALID_LOG_LEVEL = "INVALID_LOG_LEVEL"
    INVALID_PORT = "INVALID_PORT"
    SSL_CONFIG_INCOMPLETE = "SSL_CONFIG_INCOMPLETE"
    SSL_CERT_NOT_FOUND = "SSL_CERT_NOT_FOUND"
    SSL_KEY_NOT_FOUND = "SSL_KEY_NOT_FOUND"
    LETS_ENCRYPT_WITHOUT_SSL = "LETS_ENCRYPT_WITHOUT_SSL"

    # === Views ===
    VIEWS_DIR_NOT_FOUND = "VIEWS_DIR_NOT_FOUND"
    LAYOUTS_DIR_NOT_FOUND = "LAYOUTS_DIR_NOT_FOUND"
    PAGES_DIR_NOT_FOUND = "PAGES_DIR_NOT_FOUND"
    TEMPLATE_PROCESSING_FAILED = "TEMPLATE_PROCESSING_FAILED"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
