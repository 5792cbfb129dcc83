from __future__ import annotations

import logging
import time
from typing import Dict, Iterable, Optional, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from app.core.errors import RateLimitedError
from app.core.rate_limit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


def client_identity(request: Request, trusted_proxies: Iterable[str] = ()) -> str:
    """
    Client IP for rate limiting. Forwarded headers count only when the
    direct peer is listed in trusted_proxies.
    """
    peer = request.client.host if request.client and request.client.host else None
    if peer is None or peer not in set(trusted_proxies):
        return peer or "unknown"

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    return peer


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Pre-check gate in front of login, registration and selection creation.
    Routes map (METHOD, path) -> limiter; anything else passes through.
    """

    def __init__(
        self,
        app,
        routes: Dict[Tuple[str, str], FixedWindowRateLimiter],
        trusted_proxies: Iterable[str] = (),
    ):
        super().__init__(app)
        self.routes = routes
        self.trusted_proxies = frozenset(trusted_proxies)

    def _limiter_for(self, request: Request) -> Optional[FixedWindowRateLimiter]:
        return self.routes.get((request.method.upper(), request.url.path.rstrip("/")))

    async def dispatch(self, request: Request, call_next):
        limiter = self._limiter_for(request)
        if limiter is not None:
            identity = client_identity(request, self.trusted_proxies)
            result = limiter.check_and_record(identity)
            if not result.allowed:
                logger.warning(
                    "rate_limit.rejected",
                    extra={"path": request.url.path, "client": identity, "blocked": result.blocked},
                )
                err = RateLimitedError(
                    "Too many requests. Please try again later.",
                    details={"blocked": result.blocked},
                )
                return JSONResponse(
                    status_code=err.status_code,
                    content=err.to_dict(),
                    headers={
                        "Retry-After": str(result.retry_after_seconds(time.time())),
                        "X-RateLimit-Limit": str(result.limit),
                        "X-RateLimit-Remaining": "0",
                    },
                )
        return await call_next(request)
