"""
PicTweet Backend — Rate Limiting Middleware
=============================================

What:  Per-IP sliding-window limiter (RATE_LIMIT_REQUESTS per RATE_LIMIT_WINDOW seconds).
How:   Keeps recent request timestamps per client IP in memory. Once the
       window is full the request is rejected with 429 and a Retry-After
       header, using the same error body as the exception handlers.

State is per process; several uvicorn workers each enforce their own limit.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from pictweet.config import settings
from pictweet.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    # Sweep idle IPs after this many requests
    CLEANUP_INTERVAL = 1000

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
    ):
        super().__init__(app)
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window_seconds = window_seconds or settings.rate_limit_window
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._seen = 0

    def check(self, client_ip: str, now: float) -> None:
        """
        Record a request from `client_ip` at `now`.

        Raises:
            RateLimitExceededError: the window for this IP is already full
        """
        window_start = now - self.window_seconds
        timestamps = self._requests[client_ip]
        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        if len(timestamps) >= self.max_requests:
            retry_after = int(timestamps[0] + self.window_seconds - now) + 1
            raise RateLimitExceededError(retry_after=retry_after)

        timestamps.append(now)

        self._seen += 1
        if self._seen % self.CLEANUP_INTERVAL == 0:
            self._cleanup_inactive_ips(window_start)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        try:
            self.check(client_ip, time.time())
        except RateLimitExceededError as exc:
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(self._requests[client_ip]),
                self.window_seconds,
            )
            # Raised outside the router, so FastAPI's exception handlers never see it.
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request.headers.get("X-Request-ID", ""),
                },
                headers={"Retry-After": str(exc.retry_after)},
            )

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
