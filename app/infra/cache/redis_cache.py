# app/infra/cache/redis_cache.py
import os
import json
from typing import Any, Optional
import redis.asyncio as aioredis

from app.domain.ports import CachePort

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
DEFAULT_TTL = int(os.getenv("CACHE_TTL_SECONDS", "43200"))  # 12h


class RedisCache(CachePort):
    """
    Thin async wrapper over the key-value store.

        get_raw(key)          -> stored string as-is (catalog blob)
        get(key) / set(key)   -> JSON-decoded values with TTL (adapter caches)
        ping()                -> readiness probe
    """
    def __init__(self, client: Optional[aioredis.Redis] = None):
        self.r = client or aioredis.from_url(REDIS_URL, encoding="utf-8", decode_responses=True)

    @classmethod
    def from_env(cls):
        url = os.getenv("REDIS_URL", REDIS_URL)
        return cls(aioredis.from_url(url, encoding="utf-8", decode_responses=True))

    async def get_raw(self, key: str) -> Optional[str]:
        v = await self.r.get(key)
        if isinstance(v, bytes):
            v = v.decode("utf-8", errors="replace")
        return v

    async def get(self, key: str):
        v = await self.get_raw(key)
        return json.loads(v) if v else None

    async def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL):
        await self.r.set(key, json.dumps(value, ensure_ascii=False, default=str), ex=ttl)

    async def ping(self) -> bool:
        return bool(await self.r.ping())
