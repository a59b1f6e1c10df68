"""
Rate limiting middleware using an in-memory sliding window.

Attached globally in ``patientor.main.create_app`` via ``RateLimitMiddleware``.
Each middleware instance keeps its own window store, so separate app instances
(e.g. one per test) never share counters. Keys whose window has gone quiet are
swept once per window so the store stays bounded by recent clients.
"""

import time
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


def _check_rate_limit_memory(
    store: dict[str, list[float]], key: str, max_requests: int, window: int, now: float
) -> tuple[bool, int]:
    """Sliding window check against *store* (single-process only)."""
    # Remove expired entries
    hits = [t for t in store.get(key, []) if t > now - window]
    hits.append(now)
    store[key] = hits
    count = len(hits)
    return count > max_requests, count


def _sweep_stale_keys(store: dict[str, list[float]], window: int, now: float) -> int:
    """Drop keys with no request inside the window. Returns how many were dropped."""
    stale = [key for key, hits in store.items() if not hits or hits[-1] <= now - window]
    for key in stale:
        del store[key]
    return len(stale)


def _get_client_ip(request: Request, trust_forwarded_for: bool = False) -> str:
    """Extract client IP from request.

    X-Forwarded-For is only honoured when the app sits behind a trusted proxy;
    otherwise any client could pick its own key.
    """
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Global per-IP rate limiting middleware.

    A ``max_requests`` of 0 turns the limiter off.
    """

    def __init__(
        self,
        app,
        max_requests: int = 200,
        window_seconds: int = 60,
        trust_forwarded_for: bool = False,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.trust_forwarded_for = trust_forwarded_for
        self._store: dict[str, list[float]] = {}
        self._last_sweep = 0.0

    def hit(self, key: str, now: float) -> tuple[bool, int]:
        """Record a request for *key* at *now* and report whether it is over the limit."""
        if now - self._last_sweep >= self.window_seconds:
            dropped = _sweep_stale_keys(self._store, self.window_seconds, now)
            if dropped:
                logger.debug("Swept %d idle rate limit keys", dropped)
            self._last_sweep = now
        return _check_rate_limit_memory(
            self._store, key, self.max_requests, self.window_seconds, now
        )

    async def dispatch(self, request: Request, call_next):
        if self.max_requests <= 0:
            return await call_next(request)

        client_ip = _get_client_ip(request, self.trust_forwarded_for)
        key = f"global_rl:{client_ip}"

        exceeded, count = self.hit(key, time.time())

        if exceeded:
            logger.warning("Rate limit exceeded for %s (%d requests)", client_ip, count)
            return JSONResponse(
                status_code=429,
                content={
                    "detail": f"Rate limit exceeded. Max {self.max_requests} requests per {self.window_seconds}s."
                },
                headers={"Retry-After": str(self.window_seconds)},
            )

        response = await call_next(request)
        return response
