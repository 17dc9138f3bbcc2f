# -*- coding: utf-8 -*-
"""
Rate Limit Store — счётчики запросов по клиентам.

Фиксированное окно: первый запрос клиента открывает окно длиной
window_seconds, каждый следующий увеличивает счётчик. После
истечения окна счётчик начинается заново.

Хранилище скрыто за интерфейсом RateLimitStore: однопроцессный
словарь можно заменить распределённым хранилищем, не трогая
middleware.

Расположение: src/infrastructure/ratelimit/
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict

logger = logging.getLogger(__name__)


@dataclass
class WindowState:
    """Состояние окна клиента."""
    count: int
    reset_at: float  # epoch seconds

    def is_expired(self, now: float) -> bool:
        return now >= self.reset_at


@dataclass(frozen=True)
class RateLimitDecision:
    """Результат учёта запроса."""
    allowed: bool
    limit: int
    remaining: int
    reset_at: float


class RateLimitStore(ABC):
    """Порт хранилища счётчиков."""

    @abstractmethod
    async def hit(self, key: str, window_seconds: int) -> WindowState:
        """Учесть запрос клиента и вернуть состояние его окна."""
        pass

    @abstractmethod
    async def reset(self) -> None:
        pass


class InMemoryRateLimitStore(RateLimitStore):
    """
    Однопроцессное хранилище.

    Использование:
        store = InMemoryRateLimitStore()
        state = await store.hit("10.0.0.1", window_seconds=900)

    Все операции под asyncio.Lock. Истёкшие окна удаляются
    не чаще раза в purge_interval секунд.
    """

    def __init__(self, clock: Callable[[], float] = time.time, purge_interval: float = 60.0):
        self._windows: Dict[str, WindowState] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self._purge_interval = purge_interval
        self._last_purge = clock()

    async def hit(self, key: str, window_seconds: int) -> WindowState:
        async with self._lock:
            now = self._clock()
            if now - self._last_purge >= self._purge_interval:
                self._purge(now)

            state = self._windows.get(key)
            if state is None or state.is_expired(now):
                state = WindowState(count=1, reset_at=now + window_seconds)
                self._windows[key] = state
            else:
                state.count += 1

            return WindowState(count=state.count, reset_at=state.reset_at)

    async def reset(self) -> None:
        async with self._lock:
            self._windows.clear()

    def _purge(self, now: float) -> None:
        expired = [key for key, state in self._windows.items() if state.is_expired(now)]
        for key in expired:
            del self._windows[key]
        self._last_purge = now
        if expired:
            logger.debug(f"[RateLimit] Purged {len(expired)} expired windows")

    def __len__(self) -> int:
        return len(self._windows)


class RateLimiter:
    """Политика поверх хранилища: лимит и длина окна."""

    def __init__(self, store: RateLimitStore, max_requests: int, window_seconds: int):
        self.store = store
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    async def check(self, client_id: str) -> RateLimitDecision:
        state = await self.store.hit(client_id, self.window_seconds)
        return RateLimitDecision(
            allowed=state.count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - state.count),
            reset_at=state.reset_at,
        )
