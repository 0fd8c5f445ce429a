"""
test_loader.py - 설정 소스 테스트

검증:
- 점 표기 조회, 기본값
- 프로파일 우선순위
- 타입 변환 실패 → ConfigError
- YAML 로드, 환경 변수 오버라이드
"""

from pathlib import Path

import pytest

from src.config.loader import Config, apply_env_overrides, load_config
from src.domain.errors import ConfigError, ErrorCodes


@pytest.fixture
def config() -> Config:
    return Config(
        {
            "name": "viewkit",
            "server": {
                "port": 8080,
                "header": "viewkit",
                "ssl": {"enable": True},
                "timeout": {"read": "90s"},
            },
            "flags": {"yes": "yes", "off": "OFF", "bad": "maybe", "list": [1, 2]},
            "env": {
                "active": "prod",
                "prod": {"server": {"port": "9090"}},
            },
        }
    )


# =============================================================================
# Lookup 테스트
# =============================================================================

class TestConfigLookup:
    """Config 조회 테스트."""

    def test_string_default_found(self, config: Config):
        assert config.string_default("server.header", "x") == "viewkit"

    def test_string_default_missing(self, config: Config):
        assert config.string_default("server.address", "127.0.0.1") == "127.0.0.1"

    def test_number_coerced_to_string(self, config: Config):
        """YAML 숫자 → 문자열."""
        assert config.string_default("server.port", "") == "8080"

    def test_section_as_string_rejected(self, config: Config):
        with pytest.raises(ConfigError) as exc_info:
            config.string_default("server.ssl", "")

        assert exc_info.value.code == ErrorCodes.CONFIG_INVALID_VALUE

    def test_bool_default(self, config: Config):
        assert config.bool_default("server.ssl.enable", False) is True
        assert config.bool_default("server.redirect.enable", False) is False

    def test_bool_from_strings(self, config: Config):
        """yes/OFF 문자열 허용."""
        assert config.bool_default("flags.yes", False) is True
        assert config.bool_default("flags.off", True) is False

    def test_bool_invalid(self, config: Config):
        with pytest.raises(ConfigError) as exc_info:
            config.bool_default("flags.bad", False)

        assert exc_info.value.context["key"] == "flags.bad"

    def test_int_default(self, config: Config):
        assert config.int_default("server.port", 0) == 8080
        assert config.int_default("missing.key", 4) == 4

    def test_int_invalid(self, config: Config):
        with pytest.raises(ConfigError):
            config.int_default("server.header", 0)

    def test_int_rejects_bool(self, config: Config):
        with pytest.raises(ConfigError):
            config.int_default("server.ssl.enable", 0)

    def test_is_exists(self, config: Config):
        assert config.is_exists("server.timeout.read")
        assert config.is_exists("server")
        assert not config.is_exists("server.timeout.write")

    def test_get_missing_returns_none(self, config: Config):
        assert config.get("nope.nothing") is None


# =============================================================================
# Profile 테스트
# =============================================================================

class TestConfigProfile:
    """환경 프로파일 테스트."""

    def test_profile_value_wins(self, config: Config):
        config.set_profile("env.prod")

        assert config.profile == "env.prod"
        assert config.string_default("server.port", "") == "9090"

    def test_profile_falls_back_to_root(self, config: Config):
        config.set_profile("env.prod")

        assert config.string_default("server.header", "") == "viewkit"

    def test_missing_profile(self, config: Config):
        with pytest.raises(ConfigError) as exc_info:
            config.set_profile("env.staging")

        assert exc_info.value.code == ErrorCodes.CONFIG_PROFILE_NOT_FOUND
        assert config.profile is None

    def test_scalar_is_not_a_profile(self, config: Config):
        with pytest.raises(ConfigError):
            config.set_profile("env.active")


# =============================================================================
# Override 테스트
# =============================================================================

class TestEnvOverrides:
    """환경 변수 오버라이드 테스트."""

    def test_set_overrides_profile(self, config: Config):
        config.set_profile("env.prod")
        config.set("server.port", "7000")

        assert config.string_default("server.port", "") == "7000"

    def test_apply_env_overrides(self, config: Config):
        applied = apply_env_overrides(
            config,
            environ={
                "APP__SERVER__SSL__ENABLE": "false",
                "APP__REQUEST__ID__HEADER": "X-Trace-Id",
                "OTHER": "ignored",
                "APP__": "ignored",
            },
        )

        assert sorted(applied) == ["request.id.header", "server.ssl.enable"]
        assert config.bool_default("server.ssl.enable", True) is False
        assert config.string_default("request.id.header", "") == "X-Trace-Id"
        assert "request" in config.keys()

    def test_no_overrides(self, config: Config):
        assert apply_env_overrides(config, environ={}) == []


# =============================================================================
# load_config 테스트
# =============================================================================

class TestLoadConfig:
    """YAML 로드 테스트."""

    def test_loads_yaml(self, write_config):
        path = write_config({"server": {"port": "8000"}})

        cfg = load_config(path)

        assert cfg.string_default("server.port", "") == "8000"

    def test_missing_file_returns_empty(self, tmp_path: Path):
        cfg = load_config(tmp_path / "nope.yaml")

        assert cfg.keys() == []

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path).keys() == []

    def test_non_mapping_root(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.code == ErrorCodes.CONFIG_PARSE_FAILED

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("server: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.code == ErrorCodes.CONFIG_PARSE_FAILED

    def test_default_yaml_loads(self, default_config: Config):
        """프로젝트 default.yaml은 유효해야 함."""
        assert default_config.string_default("env.active", "") == "dev"
