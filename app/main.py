import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.errors import AppError, InternalError
from app.core.logging import configure_logging
from app.core.middleware import RequestIdMiddleware
from app.core.middleware_rate_limit import RateLimitMiddleware
from app.core.rate_limit import login_limiter, registration_limiter, selection_limiter
from app.api.v1.router import v1_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("request.failed", extra={"path": request.url.path, "code": exc.code})
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("request.unhandled", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content=InternalError().to_dict())

    # Middleware: rate limits (login / register / selection writes)
    if settings.rate_limit_enabled:
        login = login_limiter()
        app.state.rate_limiters = {
            "login": login,
            "registration": registration_limiter(),
            "selection": selection_limiter(),
        }
        p = settings.api_prefix.rstrip("/")
        app.add_middleware(
            RateLimitMiddleware,
            routes={
                ("POST", f"{p}/auth/admin/login"): login,
                ("POST", f"{p}/auth/participant/login"): login,
                ("POST", f"{p}/participants/register"): app.state.rate_limiters["registration"],
                ("POST", f"{p}/selections"): app.state.rate_limiters["selection"],
            },
            trusted_proxies=settings.trusted_proxies,
        )

    # Middleware: Request ID (added last so it wraps everything)
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    # API v1
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


app = create_app()
