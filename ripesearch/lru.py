"""Least-recently-used cache mirrored into a Redis database."""

from __future__ import annotations

import json
import logging
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "article:"


class LRUCache:
    """Keeps the most recent entries locally and every live entry in Redis."""

    def __init__(
        self,
        capacity: int,
        client: Any,
        prefix: str = DEFAULT_PREFIX,
        dumps: Callable[[Any], str] = json.dumps,
        loads: Callable[[Any], Any] = json.loads,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.client = client
        self.prefix = prefix
        self._dumps = dumps
        self._loads = loads
        self._entries: OrderedDict[int, Any] = OrderedDict()

    def _redis_key(self, key: int) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: int) -> Any | None:
        """The cached value, falling back to Redis; None when absent."""
        if key in self._entries:
            self._entries.move_to_end(key)
            return self._entries[key]
        try:
            data = self.client.get(self._redis_key(key))
        except RedisError:
            return None
        if data is None:
            return None
        value = self._loads(data)
        self.put(key, value)
        return value

    def put(self, key: int, value: Any) -> None:
        """Store a value, evicting the least recently used entry when full."""
        if key in self._entries:
            self._entries[key] = value
            self._entries.move_to_end(key)
        else:
            if len(self._entries) >= self.capacity:
                old_key, _ = self._entries.popitem(last=False)
                logger.info("evicting cached entry %s", old_key)
                try:
                    self.client.delete(self._redis_key(old_key))
                except RedisError:
                    pass
            self._entries[key] = value
        try:
            self.client.set(self._redis_key(key), self._dumps(value))
        except RedisError:
            pass

    def clear(self) -> None:
        """Flush the Redis database backing the cache."""
        try:
            self.client.flushdb()
        except RedisError:
            pass

    def __len__(self) -> int:
        return len(self._entries)