"""
Key-value store for JSON record collections.

A collection is a named list of JSON objects, always read and written as a
whole. Two backends are available:
- MemoryStore: process-local, used when no redis_url is configured
- RedisStore: one JSON string per collection under "{prefix}:{collection}"

Both serialise on write and parse on read, so callers never share references
with what is stored.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol, TypeVar

from pydantic import BaseModel, ValidationError
from redis.asyncio import Redis, from_url

from app.config import Settings

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CollectionStore(Protocol):
    """Read-all / write-all access to named record collections."""

    backend: str

    async def read_all(self, collection: str) -> list[dict[str, Any]]: ...

    async def write_all(self, collection: str, records: list[dict[str, Any]]) -> None: ...

    async def close(self) -> None: ...


def _decode_collection(collection: str, raw: Optional[str]) -> list[dict[str, Any]]:
    """Parse a stored collection, treating missing or corrupt data as empty."""
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning(f"Discarding corrupt collection '{collection}': {exc}")
        return []
    if not isinstance(value, list):
        logger.warning(f"Discarding collection '{collection}': expected a JSON array")
        return []
    return value


def parse_records(model: type[ModelT], collection: str, records: list[Any]) -> list[ModelT]:
    """Validate stored records into models, skipping any with the wrong shape."""
    parsed = []
    for index, record in enumerate(records):
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as exc:
            logger.warning(
                f"Skipping malformed record {index} in collection '{collection}': "
                f"{exc.error_count()} validation error(s)"
            )
    return parsed


class MemoryStore:
    """In-process store. Contents are lost on restart."""

    backend = "memory"

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    async def read_all(self, collection: str) -> list[dict[str, Any]]:
        return _decode_collection(collection, self._data.get(collection))

    async def write_all(self, collection: str, records: list[dict[str, Any]]) -> None:
        self._data[collection] = json.dumps(records)

    async def close(self) -> None:
        self._data.clear()


class RedisStore:
    """Redis-backed store using redis.asyncio."""

    backend = "redis"

    def __init__(self, client: Redis, prefix: str) -> None:
        self.client = client
        self.prefix = prefix

    def _key(self, collection: str) -> str:
        return f"{self.prefix}:{collection}"

    async def read_all(self, collection: str) -> list[dict[str, Any]]:
        raw = await self.client.get(self._key(collection))
        return _decode_collection(collection, raw)

    async def write_all(self, collection: str, records: list[dict[str, Any]]) -> None:
        await self.client.set(self._key(collection), json.dumps(records))

    async def close(self) -> None:
        await self.client.aclose()


def create_redis_client(settings: Settings) -> Redis:
    """Create a Redis client from settings, upgrading to TLS when requested."""
    url = settings.redis_url
    if settings.redis_tls and url.startswith("redis://"):
        url = url.replace("redis://", "rediss://", 1)

    return from_url(url, encoding="utf-8", decode_responses=True)


def build_store(settings: Settings) -> CollectionStore:
    """Pick the store backend for the given settings."""
    if not settings.redis_url:
        logger.info("Redis disabled: no redis_url configured, using in-memory store")
        return MemoryStore()

    logger.info(f"Using Redis store with key prefix '{settings.storage_prefix}'")
    return RedisStore(create_redis_client(settings), settings.storage_prefix)
