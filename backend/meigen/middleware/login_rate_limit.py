"""
Meigen Backend — Login Rate Limiting Middleware
===============================================

What:  Per-IP sliding window on `POST /api/login`.
Why:   The admin gate is one shared password; without a limit it can be
       guessed at wire speed.
How:   Keeps recent attempt timestamps per client IP in memory. Once an IP
       has LOGIN_RATE_LIMIT_ATTEMPTS attempts inside the last
       LOGIN_RATE_LIMIT_WINDOW seconds, further attempts are answered with
       status 429, error code FORBIDDEN and a Retry-After header, without
       reaching the route.

Every other path passes straight through. State is per process; several
uvicorn workers each keep their own window.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from meigen.config import settings
from meigen.middleware.logging import client_host
from meigen.schemas.common import error_response

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/login"


class LoginRateLimitMiddleware(BaseHTTPMiddleware):

    def __init__(
        self,
        app,
        max_attempts: Optional[int] = None,
        window_seconds: Optional[int] = None,
    ):
        super().__init__(app)
        self.max_attempts = max_attempts or settings.login_rate_limit_attempts
        self.window_seconds = window_seconds or settings.login_rate_limit_window
        self._attempts: Dict[str, List[float]] = defaultdict(list)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "POST" or request.url.path != LOGIN_PATH:
            return await call_next(request)

        ip = client_host(request)
        now = time.time()
        window_start = now - self.window_seconds

        recent = [ts for ts in self._attempts[ip] if ts > window_start]
        self._attempts[ip] = recent

        if len(recent) >= self.max_attempts:
            retry_after = int(recent[0] + self.window_seconds - now) + 1
            logger.warning(
                "Login throttled for %s: %d attempts in %ds",
                ip, len(recent), self.window_seconds,
            )
            return error_response(
                "FORBIDDEN",
                f"Too many login attempts. Try again in {retry_after} seconds.",
                status=429,
                headers={"Retry-After": str(retry_after)},
            )

        recent.append(now)
        self._prune(window_start)
        return await call_next(request)

    def _prune(self, window_start: float) -> None:
        """Forget IPs with no attempts inside the window."""
        stale = [
            ip for ip, stamps in self._attempts.items()
            if not stamps or stamps[-1] <= window_start
        ]
        for ip in stale:
            del self._attempts[ip]
