"""
test_logging.py - 로깅 설정 테스트

DoD:
- 레벨 이름 해석 (WARN 별칭 포함)
- 잘못된 레벨 → SettingsError
- 설정 기반 루트 로거 설정
"""

import logging

import pytest

from src.config.loader import Config
from src.core.logging import (
    ACCESS_LOGGER_NAME,
    get_access_logger,
    resolve_log_level,
    setup_logging_from_config,
)
from src.domain.errors import ErrorCodes, SettingsError


@pytest.fixture
def restore_root_logger():
    """루트 로거 상태 복원."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


class TestResolveLogLevel:
    """resolve_log_level 테스트."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("info", logging.INFO),
            (" Warning ", logging.WARNING),
            ("warn", logging.WARNING),
            ("ERROR", logging.ERROR),
        ],
    )
    def test_valid(self, name: str, expected: int):
        assert resolve_log_level(name) == expected

    def test_invalid(self):
        with pytest.raises(SettingsError) as exc_info:
            resolve_log_level("chatty")

        assert exc_info.value.code == ErrorCodes.INVALID_LOG_LEVEL


class TestSetupLogging:
    """setup_logging_from_config 테스트."""

    def test_applies_level(self, restore_root_logger):
        setup_logging_from_config(Config({"log": {"level": "ERROR"}}))

        assert restore_root_logger.level == logging.ERROR
        assert any(type(h) is logging.StreamHandler for h in restore_root_logger.handlers)

    def test_default_level(self, restore_root_logger):
        setup_logging_from_config(Config())

        assert restore_root_logger.level == logging.INFO

    def test_invalid_level_rejected(self, restore_root_logger):
        with pytest.raises(SettingsError):
            setup_logging_from_config(Config({"log": {"level": "LOUD"}}))


def test_access_logger_name():
    assert get_access_logger().name == ACCESS_LOGGER_NAME
