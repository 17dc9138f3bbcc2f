"""
HTTP middleware: request id, логирование запросов, rate limit.
"""

import logging
import time
import uuid
from datetime import datetime, timezone

from fastapi import Request

from src.api.responses import error_response
from src.infrastructure.ratelimit.store import RateLimiter

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Пробы здоровья не ограничиваются
EXEMPT_PATHS = {"/health", "/api/health"}


def client_id(request: Request) -> str:
    """Клиент для rate limit: x-forwarded-for → x-real-ip → адрес соединения."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def request_context_middleware(request: Request, call_next):
    """X-Request-ID + строка лога: метод, путь, статус, длительность."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    duration_ms = (time.perf_counter() - started) * 1000
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"({duration_ms:.1f} ms) [{request_id}]"
    )
    return response


async def rate_limit_middleware(request: Request, call_next):
    """
    Фиксированное окно на клиента.

    Лимитер берётся из app.state.rate_limiter; None отключает проверку.
    """
    limiter: RateLimiter = getattr(request.app.state, "rate_limiter", None)
    if limiter is None or request.url.path in EXEMPT_PATHS:
        return await call_next(request)

    decision = await limiter.check(client_id(request))
    reset = datetime.fromtimestamp(decision.reset_at, tz=timezone.utc).isoformat()

    if not decision.allowed:
        logger.warning(f"Rate limit exceeded for {client_id(request)} on {request.url.path}")
        response = error_response(429, "Too many requests. Please try again later.")
    else:
        response = await call_next(request)

    response.headers["X-RateLimit-Limit"] = str(decision.limit)
    response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
    response.headers["X-RateLimit-Reset"] = reset
    return response
