"""
Core layer: 프로세스 공통 설정.

역할:
- 로깅 설정
"""

from .logging import (
    ACCESS_LOGGER_NAME,
    get_access_logger,
    resolve_log_level,
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    "ACCESS_LOGGER_NAME",
    "get_access_logger",
    "resolve_log_level",
    "setup_logging",
    "setup_logging_from_config",
]
