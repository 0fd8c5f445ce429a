"""
uvicorn 서버 설정: Settings → uvicorn.Config.

매핑:
- server.address / server.port → host / port
- server.timeout.read → timeout_keep_alive
- server.timeout.grace_shutdown → timeout_graceful_shutdown
- server.max_header_bytes → h11_max_incomplete_event_size
- server.ssl.cert / key → ssl_certfile / ssl_keyfile
- Server 헤더, 접근 로그는 미들웨어가 담당 (uvicorn 기본값 끔)

server.timeout.write는 uvicorn에 대응 옵션이 없어 Settings에만 보관한다.
"""

import logging

import uvicorn
from fastapi import FastAPI

from src.settings.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"


def build_server_config(app: FastAPI, settings: Settings) -> uvicorn.Config:
    """
    Settings로 uvicorn.Config 생성.

    Args:
        app: ASGI 앱
        settings: 해석된 Settings

    Returns:
        uvicorn.Config
    """
    ssl_options = {}
    if settings.ssl_enabled and not settings.lets_encrypt_enabled:
        ssl_options = {
            "ssl_certfile": settings.ssl_cert,
            "ssl_keyfile": settings.ssl_key,
        }
    elif settings.lets_encrypt_enabled:
        logger.warning(
            "Let's Encrypt is enabled; certificates must be provisioned by the "
            "deployment (e.g. TLS terminating proxy)"
        )

    return uvicorn.Config(
        app,
        host=settings.http_address or DEFAULT_HOST,
        port=int(settings.http_port),
        timeout_keep_alive=max(1, int(settings.http_read_timeout.total_seconds())),
        timeout_graceful_shutdown=int(settings.shutdown_grace_timeout.total_seconds()),
        h11_max_incomplete_event_size=settings.http_max_header_bytes,
        server_header=False,
        access_log=False,
        **ssl_options,
    )
