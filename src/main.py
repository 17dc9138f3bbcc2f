"""
FastAPI Application Entry Point.

Путь: src/main.py
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware import rate_limit_middleware, request_context_middleware
from src.api.responses import app_error_handler, unhandled_exception_handler, validation_exception_handler
from src.api.routes import articles, categories, comments, health, tags, users
from src.infrastructure.config.logging_config import configure_logging
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.ratelimit.store import InMemoryRateLimitStore, RateLimiter
from src.shared.exceptions.domain_exceptions import AppError

API_PREFIX = "/api"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Собрать приложение: middleware, обработчики ошибок, роуты."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Двуязычная (বাংলা / English) новостная CMS: статьи, рубрики, теги, комментарии",
        version=settings.app_version,
        debug=settings.debug
    )

    # Rate limit (лимитер можно заменить через app.state)
    app.state.rate_limiter = None
    if settings.rate_limit_enabled:
        app.state.rate_limiter = RateLimiter(
            InMemoryRateLimitStore(),
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_context_middleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
    )

    # Errors
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Routes
    for module in (articles, categories, comments, tags, users, health):
        app.include_router(module.router, prefix=API_PREFIX)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, reload=get_settings().debug)
