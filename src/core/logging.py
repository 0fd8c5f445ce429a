"""
Logging setup: 프로세스 로깅 설정.

규칙:
- 모듈마다 logger = logging.getLogger(__name__)
- 포맷: '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
- 레벨: 설정 log.level (기본 INFO), 잘못된 레벨 → SettingsError
- 접근 로그: "access" logger
"""

import logging

from src.config.loader import Config
from src.domain.errors import ErrorCodes, SettingsError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = "INFO"
ACCESS_LOGGER_NAME = "access"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def resolve_log_level(name: str) -> int:
    """
    레벨 이름 → logging 레벨 값.

    Raises:
        SettingsError: INVALID_LOG_LEVEL
    """
    level = name.strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level not in _LEVELS:
        raise SettingsError(
            ErrorCodes.INVALID_LOG_LEVEL,
            f"'log.level' is not a valid level value: {name}",
            level=name,
        )
    return getattr(logging, level)


def setup_logging(level: str = DEFAULT_LOG_LEVEL, fmt: str = LOG_FORMAT) -> None:
    """
    루트 로거 설정.

    Args:
        level: 레벨 이름 (DEBUG, INFO, WARN, ...)
        fmt: 로그 포맷
    """
    logging.basicConfig(
        level=resolve_log_level(level),
        format=fmt,
        handlers=[
            logging.StreamHandler(),
        ],
        force=True,
    )


def setup_logging_from_config(cfg: Config) -> None:
    """설정의 log.level / log.format으로 로깅 설정."""
    setup_logging(
        level=cfg.string_default("log.level", DEFAULT_LOG_LEVEL),
        fmt=cfg.string_default("log.format", LOG_FORMAT),
    )


def get_access_logger() -> logging.Logger:
    return logging.getLogger(ACCESS_LOGGER_NAME)
