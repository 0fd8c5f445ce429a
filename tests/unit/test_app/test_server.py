"""
test_server.py - Settings → uvicorn.Config 매핑 테스트
"""

from datetime import timedelta

from fastapi import FastAPI

from src.app.server import DEFAULT_HOST, build_server_config
from src.settings.settings import Settings


class TestBuildServerConfig:
    """build_server_config 테스트."""

    def test_maps_settings(self):
        settings = Settings(
            http_address="127.0.0.1",
            http_port="9000",
            http_read_timeout=timedelta(seconds=30),
            shutdown_grace_timeout=timedelta(minutes=2),
            http_max_header_bytes=64 * 1024,
        )

        config = build_server_config(FastAPI(), settings)

        assert config.host == "127.0.0.1"
        assert config.port == 9000
        assert config.timeout_keep_alive == 30
        assert config.timeout_graceful_shutdown == 120
        assert config.h11_max_incomplete_event_size == 64 * 1024
        assert config.server_header is False
        assert config.access_log is False

    def test_default_host(self):
        config = build_server_config(FastAPI(), Settings())

        assert config.host == DEFAULT_HOST
        assert config.port == 8080

    def test_manual_certificates(self, cert_files):
        cert, key = cert_files
        settings = Settings(ssl_enabled=True, ssl_cert=cert, ssl_key=key)

        config = build_server_config(FastAPI(), settings)

        assert config.ssl_certfile == cert
        assert config.ssl_keyfile == key

    def test_lets_encrypt_skips_certificates(self, caplog):
        settings = Settings(ssl_enabled=True, lets_encrypt_enabled=True)

        config = build_server_config(FastAPI(), settings)

        assert config.ssl_certfile is None
        assert "Let's Encrypt" in caplog.text
