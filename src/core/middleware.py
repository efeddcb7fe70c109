import time

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

SLOW_THRESHOLD_MS = 1000
LOGGED_PREFIXES = ("/api", "/health")
# 클라이언트가 일정 간격으로 계속 읽는 경로. 느려도 경고하지 않는다.
POLLING_PREFIX = "/api/transform/"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """API 요청을 로깅하는 미들웨어.

    기록 항목: 메서드, 경로, 클라이언트 IP, 상태코드, 처리시간(ms)
    처리시간이 1000ms를 초과하면 WARNING 레벨로 기록 (폴링 조회 제외).
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if not path.startswith(LOGGED_PREFIXES):
            return await call_next(request)

        start = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start) * 1000
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        status = response.status_code

        is_polling = method == "GET" and path.startswith(POLLING_PREFIX)
        if elapsed_ms > SLOW_THRESHOLD_MS and not is_polling:
            logger.warning(
                f"{method} {path} | {client_ip} | {status} | {elapsed_ms:.0f}ms (slow)"
            )
        else:
            logger.info(
                f"{method} {path} | {client_ip} | {status} | {elapsed_ms:.0f}ms"
            )

        return response
