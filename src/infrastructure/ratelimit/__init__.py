# -*- coding: utf-8 -*-
"""
Rate limit module — счётчики запросов по клиентам.
"""

from src.infrastructure.ratelimit.store import (
    InMemoryRateLimitStore,
    RateLimitDecision,
    RateLimiter,
    RateLimitStore,
    WindowState,
)

__all__ = [
    'InMemoryRateLimitStore',
    'RateLimitDecision',
    'RateLimiter',
    'RateLimitStore',
    'WindowState',
]
