"""
HTTP 미들웨어: Settings 기반 요청/응답 처리.

- request id: 들어온 헤더 재사용, 없으면 uuid4 생성
- Server 헤더, 보안 헤더
- 요청 본문 크기 제한 (Content-Length 기준)
- 접근 로그

모든 미들웨어는 request.app.state.settings를 읽는다.
"""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from src.core.logging import get_access_logger
from src.domain.constants import HEADER_SERVER
from src.settings.settings import Settings

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]

STATIC_PATH_PREFIX = "/static"

# gzip 대상 최소 응답 크기 (bytes)
GZIP_MINIMUM_SIZE = 500


def _settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


async def request_id_middleware(request: Request, call_next: CallNext) -> Response:
    header_key = _settings(request).request_id_header_key
    request_id = request.headers.get(header_key) or uuid.uuid4().hex
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers[header_key] = request_id
    return response


async def server_header_middleware(request: Request, call_next: CallNext) -> Response:
    response = await call_next(request)
    response.headers[HEADER_SERVER] = _settings(request).server_header
    return response


async def secure_headers_middleware(request: Request, call_next: CallNext) -> Response:
    response = await call_next(request)
    for header, value in _settings(request).secure_headers.items():
        response.headers.setdefault(header, value)
    return response


async def max_body_size_middleware(request: Request, call_next: CallNext) -> Response:
    """
    Content-Length가 request_max_body_size를 넘으면 413.

    제한: Content-Length 헤더만 검사하므로 chunked 전송 본문은 통과한다.
    """
    limit = _settings(request).request_max_body_size
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        logger.warning(
            f"Request body too large: {request.method} {request.url.path} "
            f"({content_length} > {limit} bytes)"
        )
        return JSONResponse(
            status_code=413,
            content={"detail": f"Request body too large. Maximum size is {limit} bytes"},
        )
    return await call_next(request)


async def access_log_middleware(request: Request, call_next: CallNext) -> Response:
    settings = _settings(request)
    start_time = time.time()
    response = await call_next(request)

    if request.url.path.startswith(STATIC_PATH_PREFIX) and not settings.static_access_log_enabled:
        return response

    process_time = time.time() - start_time
    request_id = getattr(request.state, "request_id", "-")
    client = request.client.host if request.client else "-"
    get_access_logger().info(
        f"[{request_id}] {client} {request.method} {request.url.path} "
        f"- {response.status_code} - {process_time:.3f}s"
    )
    return response


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Settings에 따라 미들웨어 등록.

    Starlette는 나중에 등록한 미들웨어가 바깥쪽이므로
    request id를 마지막에 등록한다 (접근 로그가 request id를 볼 수 있도록).
    """
    if settings.gzip_enabled:
        app.add_middleware(
            GZipMiddleware,
            minimum_size=GZIP_MINIMUM_SIZE,
            compresslevel=settings.gzip_level,
        )
    if settings.secure_headers_enabled:
        app.middleware("http")(secure_headers_middleware)
    if settings.server_header_enabled:
        app.middleware("http")(server_header_middleware)
    app.middleware("http")(max_body_size_middleware)
    if settings.access_log_enabled:
        app.middleware("http")(access_log_middleware)
    if settings.request_id_enabled:
        app.middleware("http")(request_id_middleware)
