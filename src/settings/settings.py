"""
Settings: 설정 소스 → 타입이 확정된 운영 파라미터.

규칙:
- 첫 번째 잘못된 필드에서 SettingsError로 즉시 실패 (fail-fast)
- 실패 시 부분 적용 금지: 임시 레코드에 해석 후 성공 시에만 반영
  (설정 소스의 프로파일도 원래 값으로 복원)
- 전역 상태 변경 금지: gzip 레벨도 Settings 필드로만 보관
- SSL 검증 매트릭스:
  ssl on  + LE off → cert/key 필수, 파일 존재 필수
  ssl on  + LE on  → OK (인증서 자동 발급)
  ssl off + LE on  → 에러
  ssl off + LE off → OK
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

from src.config.loader import Config
from src.domain.constants import (
    ALLOWED_TIMEOUT_UNITS,
    APP_TYPE_WEBSOCKET,
    DEFAULT_ENV_PROFILE,
    DEFAULT_GRACE_SHUTDOWN,
    DEFAULT_GZIP_LEVEL,
    DEFAULT_HTTP_PORT,
    DEFAULT_MAX_BODY_SIZE,
    DEFAULT_MAX_HEADER_BYTES,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_SECURE_JSON_PREFIX,
    DEFAULT_WRITE_TIMEOUT,
    HEADER_REFERRER_POLICY,
    HEADER_STRICT_TRANSPORT_SECURITY,
    HEADER_X_CONTENT_TYPE_OPTIONS,
    HEADER_X_FRAME_OPTIONS,
    HEADER_X_REQUEST_ID,
    HEADER_X_XSS_PROTECTION,
    PROFILE_PREFIX,
)
from src.domain.errors import ConfigError, ErrorCodes, SettingsError
from src.settings.units import (
    is_valid_time_unit,
    mime_type_by_extension,
    parse_bytes,
    parse_duration,
)

logger = logging.getLogger(__name__)

# 보안 헤더: (설정 키 suffix, 헤더 이름, 기본값)
SECURE_HEADER_DEFAULTS = (
    ("xfo", HEADER_X_FRAME_OPTIONS, "SAMEORIGIN"),
    ("xcto", HEADER_X_CONTENT_TYPE_OPTIONS, "nosniff"),
    ("xxssp", HEADER_X_XSS_PROTECTION, "1; mode=block"),
    ("rp", HEADER_REFERRER_POLICY, "no-referrer-when-downgrade"),
)
DEFAULT_STS = "max-age=31536000; includeSubDomains"


@dataclass
class Settings:
    """
    설정에서 해석/추론된 애플리케이션 운영 값.

    refresh()로만 갱신된다. initialized, hot_reload, pid, base_dir은
    애플리케이션 초기화 코드가 채운다.
    """

    env_profile: str = ""

    # Server
    http_address: str = ""
    http_port: str = DEFAULT_HTTP_PORT
    http_read_timeout: timedelta = timedelta(seconds=90)
    http_write_timeout: timedelta = timedelta(seconds=90)
    http_max_header_bytes: int = 1024 * 1024
    shutdown_grace_time_str: str = DEFAULT_GRACE_SHUTDOWN
    shutdown_grace_timeout: timedelta = timedelta(seconds=60)
    redirect: bool = False
    type: str = ""

    # TLS
    ssl_enabled: bool = False
    lets_encrypt_enabled: bool = False
    ssl_cert: str = ""
    ssl_key: str = ""

    # Headers / request
    server_header: str = ""
    server_header_enabled: bool = False
    request_id_enabled: bool = True
    request_id_header_key: str = HEADER_X_REQUEST_ID
    request_max_body_size: int = 5 * 1024 * 1024
    secure_headers_enabled: bool = True
    secure_headers: dict[str, str] = field(default_factory=dict)

    # Render
    gzip_enabled: bool = True
    gzip_level: int = DEFAULT_GZIP_LEVEL
    default_content_type: str = ""
    secure_json_prefix: str = DEFAULT_SECURE_JSON_PREFIX

    # Logging
    access_log_enabled: bool = False
    static_access_log_enabled: bool = True
    dump_log_enabled: bool = False

    # 초기화 코드가 관리
    initialized: bool = False
    hot_reload: bool = False
    pid: int = 0
    base_dir: str = ""

    _cfg: Config | None = field(default=None, repr=False, compare=False)

    # =========================================================================
    # Profile
    # =========================================================================

    def set_profile(self, profile: str) -> None:
        """
        환경 프로파일 설정.

        Args:
            profile: "prod" 또는 "env.prod"

        Raises:
            ConfigError: CONFIG_PROFILE_NOT_FOUND
        """
        if self._cfg is None:
            raise SettingsError(
                ErrorCodes.CONFIG_PROFILE_NOT_FOUND,
                "settings have no config; call refresh() first",
                profile=profile,
            )
        if not profile.startswith(PROFILE_PREFIX):
            profile = PROFILE_PREFIX + profile
        self._cfg.set_profile(profile)
        self.env_profile = profile.removeprefix(PROFILE_PREFIX)

    # =========================================================================
    # Refresh
    # =========================================================================

    def refresh(self, cfg: Config) -> None:
        """
        설정 값을 해석하여 Settings를 갱신.

        Args:
            cfg: 설정 소스

        Raises:
            SettingsError: 잘못된 값 (첫 번째 오류에서 중단)
            ConfigError: 타입 변환 실패
        """
        previous_profile = cfg.profile
        try:
            values = _resolve(cfg)
        except (ConfigError, SettingsError):
            cfg.profile = previous_profile
            raise
        for name, value in values.items():
            setattr(self, name, value)
        self._cfg = cfg


# =============================================================================
# Resolution
# =============================================================================


def _resolve(cfg: Config) -> dict[str, Any]:
    """설정 소스에서 Settings 필드 값 dict 생성 (Settings는 건드리지 않음)."""
    s: dict[str, Any] = {}

    s["env_profile"] = _apply_profile(
        cfg, cfg.string_default("env.active", DEFAULT_ENV_PROFILE)
    )
    s["ssl_enabled"] = cfg.bool_default("server.ssl.enable", False)
    s["lets_encrypt_enabled"] = cfg.bool_default("server.ssl.lets_encrypt.enable", False)
    s["redirect"] = cfg.bool_default("server.redirect.enable", False)
    s["http_address"] = cfg.string_default("server.address", "")
    s["http_port"] = cfg.string_default("server.port", DEFAULT_HTTP_PORT)
    if not s["http_port"].isdigit() or not 0 < int(s["http_port"]) < 65536:
        raise SettingsError(
            ErrorCodes.INVALID_PORT,
            f"'server.port' is not a valid port value: {s['http_port']}",
            port=s["http_port"],
        )

    read_timeout = cfg.string_default("server.timeout.read", DEFAULT_READ_TIMEOUT)
    write_timeout = cfg.string_default("server.timeout.write", DEFAULT_WRITE_TIMEOUT)
    if not is_valid_time_unit(read_timeout, *ALLOWED_TIMEOUT_UNITS) or not is_valid_time_unit(
        write_timeout, *ALLOWED_TIMEOUT_UNITS
    ):
        raise SettingsError(
            ErrorCodes.INVALID_TIME_UNIT,
            "'server.timeout.{read|write}' value is not a valid time unit",
            read=read_timeout,
            write=write_timeout,
        )
    s["http_read_timeout"] = _duration("server.timeout.read", read_timeout)
    s["http_write_timeout"] = _duration("server.timeout.write", write_timeout)

    s["http_max_header_bytes"] = _size(
        "server.max_header_bytes",
        cfg.string_default("server.max_header_bytes", DEFAULT_MAX_HEADER_BYTES),
    )

    s["ssl_cert"] = cfg.string_default("server.ssl.cert", "")
    s["ssl_key"] = cfg.string_default("server.ssl.key", "")
    check_ssl_config(
        s["ssl_enabled"], s["lets_encrypt_enabled"], s["ssl_cert"], s["ssl_key"]
    )

    s["type"] = cfg.string_default("type", "")
    if s["type"] != APP_TYPE_WEBSOCKET:
        s["request_max_body_size"] = _size(
            "request.max_body_size",
            cfg.string_default("request.max_body_size", DEFAULT_MAX_BODY_SIZE),
        )
        s["server_header"] = cfg.string_default("server.header", "")
        s["server_header_enabled"] = bool(s["server_header"].strip())
        s["request_id_enabled"] = cfg.bool_default("request.id.enable", True)
        s["request_id_header_key"] = cfg.string_default("request.id.header", HEADER_X_REQUEST_ID)
        s["secure_headers_enabled"] = cfg.bool_default("security.http_header.enable", True)
        s["secure_headers"] = _secure_headers(cfg, s["ssl_enabled"])
        s["gzip_enabled"] = cfg.bool_default("render.gzip.enable", True)
        s["access_log_enabled"] = cfg.bool_default("server.access_log.enable", False)
        s["static_access_log_enabled"] = cfg.bool_default("server.access_log.static_file", True)
        s["dump_log_enabled"] = cfg.bool_default("server.dump_log.enable", False)

        render_default = cfg.string_default("render.default", "")
        s["default_content_type"] = (
            mime_type_by_extension(f"some.{render_default}") if render_default else ""
        )
        s["secure_json_prefix"] = cfg.string_default(
            "render.secure_json.prefix", DEFAULT_SECURE_JSON_PREFIX
        )

        gzip_level = cfg.int_default("render.gzip.level", DEFAULT_GZIP_LEVEL)
        if not 1 <= gzip_level <= 9:
            raise SettingsError(
                ErrorCodes.INVALID_GZIP_LEVEL,
                f"'render.gzip.level' is not a valid level value: {gzip_level}",
                level=gzip_level,
            )
        s["gzip_level"] = gzip_level
    else:
        # websocket: HTTP 응답 처리 미들웨어 끔
        s["request_id_enabled"] = False
        s["secure_headers_enabled"] = False
        s["gzip_enabled"] = False

    grace = cfg.string_default("server.timeout.grace_shutdown", DEFAULT_GRACE_SHUTDOWN)
    if not is_valid_time_unit(grace, *ALLOWED_TIMEOUT_UNITS):
        logger.warning(
            "'server.timeout.grace_shutdown' value is not a valid time unit, "
            f"assigning default value {DEFAULT_GRACE_SHUTDOWN}"
        )
        grace = DEFAULT_GRACE_SHUTDOWN
    try:
        s["shutdown_grace_timeout"] = parse_duration(grace)
    except ValueError:
        logger.warning(
            f"'server.timeout.grace_shutdown' value {grace!r} cannot be parsed, "
            f"assigning default value {DEFAULT_GRACE_SHUTDOWN}"
        )
        grace = DEFAULT_GRACE_SHUTDOWN
        s["shutdown_grace_timeout"] = parse_duration(grace)
    s["shutdown_grace_time_str"] = grace

    return s


def check_ssl_config(
    ssl_enabled: bool,
    lets_encrypt_enabled: bool,
    ssl_cert: str,
    ssl_key: str,
) -> None:
    """
    SSL 설정 조합 검증.

    Raises:
        SettingsError: SSL_CONFIG_INCOMPLETE, SSL_CERT_NOT_FOUND,
            SSL_KEY_NOT_FOUND, LETS_ENCRYPT_WITHOUT_SSL
    """
    if ssl_enabled and not lets_encrypt_enabled:
        if not ssl_cert.strip() or not ssl_key.strip():
            raise SettingsError(
                ErrorCodes.SSL_CONFIG_INCOMPLETE,
                "SSL config is incomplete; either enable 'server.ssl.lets_encrypt.enable' "
                "or provide 'server.ssl.cert' & 'server.ssl.key' value",
            )
        if not Path(ssl_cert).exists():
            raise SettingsError(
                ErrorCodes.SSL_CERT_NOT_FOUND,
                f"SSL cert file not found: {ssl_cert}",
                path=ssl_cert,
            )
        if not Path(ssl_key).exists():
            raise SettingsError(
                ErrorCodes.SSL_KEY_NOT_FOUND,
                f"SSL key file not found: {ssl_key}",
                path=ssl_key,
            )

    if lets_encrypt_enabled and not ssl_enabled:
        raise SettingsError(
            ErrorCodes.LETS_ENCRYPT_WITHOUT_SSL,
            "let's encrypt enabled, however SSL 'server.ssl.enable' is not enabled "
            "for application",
        )


# =============================================================================
# Internal Helpers
# =============================================================================


def _apply_profile(cfg: Config, profile: str) -> str:
    """프로파일 적용. 섹션이 없으면 경고만 남기고 루트 값으로 진행."""
    if not profile.startswith(PROFILE_PREFIX):
        profile = PROFILE_PREFIX + profile
    try:
        cfg.set_profile(profile)
    except ConfigError as e:
        logger.warning(f"Environment profile not applied: {e.message}")
    return profile.removeprefix(PROFILE_PREFIX)


def _duration(key: str, value: str) -> timedelta:
    try:
        return parse_duration(value)
    except ValueError as e:
        raise SettingsError(
            ErrorCodes.INVALID_TIME_UNIT,
            f"'{key}': {e}",
            key=key,
            value=value,
        ) from e


def _size(key: str, value: str) -> int:
    try:
        return parse_bytes(value)
    except ValueError as e:
        raise SettingsError(
            ErrorCodes.INVALID_SIZE_UNIT,
            f"'{key}' value is not a valid size unit",
            key=key,
            value=value,
        ) from e


def _secure_headers(cfg: Config, ssl_enabled: bool) -> dict[str, str]:
    """security.http_header.* → 응답 헤더 dict. 빈 값은 헤더 생략."""
    headers = {}
    for suffix, header, default in SECURE_HEADER_DEFAULTS:
        value = cfg.string_default(f"security.http_header.{suffix}", default)
        if value:
            headers[header] = value

    if ssl_enabled:
        sts = cfg.string_default("security.http_header.sts", DEFAULT_STS)
        if sts:
            headers[HEADER_STRICT_TRANSPORT_SECURITY] = sts
    return headers
