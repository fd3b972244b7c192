"""
Meigen Backend — Access Logging Middleware
==========================================

One line per request on the `meigen.access` logger:

    GET /api/quotes 200 12.3ms [a1b2c3d4] from 127.0.0.1

Level follows the status class (5xx ERROR, 4xx WARNING, otherwise INFO).
`/health` is skipped; probes hit it every few seconds. Request bodies and
cookies are never logged, since login bodies carry the admin password.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from meigen.middleware.request_id import request_id_var

logger = logging.getLogger("meigen.access")

SKIPPED_PATHS = {"/health"}


def client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        rid = request_id_var.get("")
        ip = client_host(request)
        logger.log(
            level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": ip,
            },
        )
        return response
