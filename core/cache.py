from typing import Dict, Optional, Protocol
import logging

from aiocache import SimpleMemoryCache
from aiocache.serializers import PickleSerializer
from pydantic import BaseModel

logger = logging.getLogger(__name__)

class CachedResponse(BaseModel):
    """Serialized response as stored in the cache."""
    body: str
    status_code: int = 200
    headers: Dict[str, str] = {}

class ResponseCacheStore(Protocol):
    """Key-value store with per-entry TTL."""

    async def get(self, key: str) -> Optional[CachedResponse]:
        ...

    async def put(self, key: str, value: CachedResponse, ttl: int) -> None:
        ...

    async def close(self) -> None:
        ...

class MemoryResponseCache:
    """In-process response cache backed by aiocache."""

    def __init__(self, namespace: str = "erdetkoldt"):
        self._cache = SimpleMemoryCache(
            serializer=PickleSerializer(),
            namespace=namespace
        )

    async def get(self, key: str) -> Optional[CachedResponse]:
        return await self._cache.get(key)

    async def put(self, key: str, value: CachedResponse, ttl: int) -> None:
        await self._cache.set(key, value, ttl=ttl)
        logger.debug(f"Stored response under {key} for {ttl}s")

    async def close(self) -> None:
        await self._cache.close()
