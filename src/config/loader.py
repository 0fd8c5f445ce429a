"""
설정 소스: YAML 로드 + 점 표기 키 조회 + 환경 프로파일.

규칙:
- 키는 점 표기 (예: server.ssl.enable)
- 활성 프로파일(env.<name>) 섹션이 루트보다 우선
- 타입 변환 실패 → ConfigError (기본값으로 조용히 대체하지 않음)
- 파일 없음 → 빈 설정 (모든 값이 기본값)
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from src.domain.errors import ConfigError, ErrorCodes

logger = logging.getLogger(__name__)

# 환경 변수 오버라이드 prefix: APP__SERVER__PORT → server.port
ENV_OVERRIDE_PREFIX = "APP__"

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})

_MISSING = object()


class Config:
    """
    점 표기 키로 접근하는 설정 객체.

    구조 예시 (default.yaml):
        server:
          timeout:
            read: 90s
        env:
          active: dev
          dev:
            server:
              port: "8000"

    set_profile("env.dev") 이후 server.port 조회는 env.dev.server.port를
    먼저 보고, 없으면 루트의 server.port를 본다.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data if data is not None else {}
        self._overrides: dict[str, Any] = {}
        self.profile: str | None = None

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, key: str) -> Any:
        """값 조회 (프로파일 우선). 없으면 None."""
        value = self._get(key)
        return None if value is _MISSING else value

    def is_exists(self, key: str) -> bool:
        """키 존재 여부."""
        return self._get(key) is not _MISSING

    def keys(self) -> list[str]:
        """루트 레벨 키 목록."""
        return list(dict.fromkeys([*self._data.keys(), *self._overrides.keys()]))

    def string_default(self, key: str, default: str) -> str:
        """
        문자열 값 조회.

        숫자는 문자열로 변환 (YAML에서 port: 8080 같은 경우).

        Raises:
            ConfigError: CONFIG_INVALID_VALUE (섹션/리스트)
        """
        value = self._get(key)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return str(value)
        raise ConfigError(
            ErrorCodes.CONFIG_INVALID_VALUE,
            f"'{key}' is not a string value",
            key=key,
            value=value,
        )

    def bool_default(self, key: str, default: bool) -> bool:
        """
        불리언 값 조회.

        허용: YAML bool, "true/false/yes/no/on/off/1/0" (대소문자 무시)

        Raises:
            ConfigError: CONFIG_INVALID_VALUE
        """
        value = self._get(key)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, (str, int)):
            text = str(value).strip().lower()
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
        raise ConfigError(
            ErrorCodes.CONFIG_INVALID_VALUE,
            f"'{key}' is not a boolean value: {value!r}",
            key=key,
            value=value,
        )

    def int_default(self, key: str, default: int) -> int:
        """
        정수 값 조회.

        Raises:
            ConfigError: CONFIG_INVALID_VALUE
        """
        value = self._get(key)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ConfigError(
            ErrorCodes.CONFIG_INVALID_VALUE,
            f"'{key}' is not an integer value: {value!r}",
            key=key,
            value=value,
        )

    # =========================================================================
    # Mutation
    # =========================================================================

    def set(self, key: str, value: Any) -> None:
        """
        점 표기 키로 값 설정.

        설정된 값은 프로파일/루트보다 우선한다 (환경 변수 오버라이드용).
        """
        parts = key.split(".")
        node = self._overrides
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def set_profile(self, profile: str) -> None:
        """
        활성 프로파일 설정.

        Args:
            profile: 프로파일 키 (예: "env.prod")

        Raises:
            ConfigError: CONFIG_PROFILE_NOT_FOUND
        """
        section = _lookup(self._data, profile)
        if not isinstance(section, Mapping):
            raise ConfigError(
                ErrorCodes.CONFIG_PROFILE_NOT_FOUND,
                f"profile '{profile}' doesn't exist",
                profile=profile,
            )
        self.profile = profile

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _get(self, key: str) -> Any:
        value = _lookup(self._overrides, key)
        if value is not _MISSING:
            return value
        if self.profile:
            value = _lookup(self._data, f"{self.profile}.{key}")
            if value is not _MISSING:
                return value
        return _lookup(self._data, key)


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """점 표기 키로 중첩 dict 탐색. 없으면 _MISSING."""
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node


# =============================================================================
# Loading
# =============================================================================


def load_config(config_path: Path | None = None) -> Config:
    """
    YAML 설정 파일 로드.

    Args:
        config_path: 설정 파일 경로 (None이면 프로젝트 루트의 default.yaml)

    Returns:
        Config (파일이 없으면 빈 설정)

    Raises:
        ConfigError: CONFIG_PARSE_FAILED
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "default.yaml"

    if not config_path.exists():
        logger.warning(f"Config file not found, using defaults: {config_path}")
        return Config()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            ErrorCodes.CONFIG_PARSE_FAILED,
            f"failed to parse config file: {e}",
            path=str(config_path),
        ) from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(
            ErrorCodes.CONFIG_PARSE_FAILED,
            "config root must be a mapping",
            path=str(config_path),
        )
    return Config(data)


def apply_env_overrides(
    config: Config,
    environ: Mapping[str, str] | None = None,
    prefix: str = ENV_OVERRIDE_PREFIX,
) -> list[str]:
    """
    환경 변수로 설정 덮어쓰기.

    APP__SERVER__SSL__ENABLE=true → server.ssl.enable = "true"

    Args:
        config: 대상 Config
        environ: 환경 변수 (None이면 os.environ)
        prefix: 대상 변수 prefix

    Returns:
        덮어쓴 키 목록
    """
    if environ is None:
        environ = os.environ

    applied = []
    for name, value in environ.items():
        if not name.startswith(prefix) or len(name) == len(prefix):
            continue
        key = ".".join(part.lower() for part in name[len(prefix):].split("__"))
        config.set(key, value)
        applied.append(key)

    if applied:
        logger.info(f"Config overridden from environment: {', '.join(sorted(applied))}")
    return applied
