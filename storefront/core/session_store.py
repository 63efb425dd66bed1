"""会话存储 - 进程内 TTL 映射"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from loguru import logger

from storefront.core.database import utc_now

Clock = Callable[[], datetime]

V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class _Entry(Generic[V]):
    value: V
    expires_at: datetime


class SessionStore(Generic[V]):
    """
    线程安全的过期映射（绝对过期时间，不滑动）

    注意：
    - get() 在 now >= expires_at 时视为不存在，并顺带清除该条目
    - 只在当前进程内有效，多实例部署需替换为共享缓存
    - 超过 max_entries 时 set() 会先清理过期条目
    """

    def __init__(self, *, clock: Clock = utc_now, max_entries: int | None = None) -> None:
        self._clock = clock
        self._max_entries = max_entries
        self._entries: dict[str, _Entry[V]] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: V, expires_at: datetime) -> None:
        with self._lock:
            if self._max_entries is not None and len(self._entries) >= self._max_entries:
                purged = self._purge_locked(self._clock())
                logger.debug("Session store at capacity, purged {} expired", purged)
            self._entries[key] = _Entry(value, expires_at)

    def get(self, key: str) -> V | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                return None
            return entry.value

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def purge_expired(self) -> int:
        """清除所有过期条目，返回清除数量"""
        with self._lock:
            return self._purge_locked(self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _purge_locked(self, now: datetime) -> int:
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
