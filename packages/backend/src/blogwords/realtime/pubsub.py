"""Redis connection + snapshot store.

Learn: Redis pub/sub is fire-and-forget. If no one is listening, the
message is lost. That's fine here because the same text is also SET
under the snapshot key, so a client that connects later reads the
stored copy first.
"""

import json
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from blogwords.config import settings
from blogwords.errors import MalformedSnapshotError, PublishError
from blogwords.words import FrequencyMap

# Global Redis connection pool (initialized in lifespan)
_redis: Optional[aioredis.Redis] = None


async def init_redis(url: Optional[str] = None) -> aioredis.Redis:
    """Initialize the Redis connection pool."""
    global _redis
    _redis = aioredis.from_url(
        url or settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    # Verify connection
    await _redis.ping()
    return _redis


async def close_redis() -> None:
    """Close the Redis connection pool."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def get_redis() -> aioredis.Redis:
    """Get the Redis connection (must be initialized first)."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


def encode_snapshot(freq: FrequencyMap) -> str:
    return json.dumps(freq, ensure_ascii=False, separators=(",", ":"))


def decode_snapshot(raw: str) -> FrequencyMap:
    """Parse stored snapshot text back into a frequency map."""
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise MalformedSnapshotError(f"snapshot is not JSON: {e}") from e
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, int) and not isinstance(v, bool) and v >= 0
        for k, v in data.items()
    ):
        raise MalformedSnapshotError("snapshot is not a word → count object")
    return data


class SnapshotStore:
    """The shared, externally readable copy of the latest frequency map.

    Learn: publish() is the only writer. It SETs the key first and then
    PUBLISHes the same text, so anyone notified can also GET a value
    that matches what they were sent.
    """

    def __init__(
        self,
        redis: Optional[aioredis.Redis] = None,
        *,
        key: Optional[str] = None,
        channel: Optional[str] = None,
    ):
        self._redis = redis
        self.key = key or settings.snapshot_key
        self.channel = channel or settings.snapshot_channel

    @property
    def redis(self) -> aioredis.Redis:
        return self._redis if self._redis is not None else get_redis()

    async def publish(self, freq: FrequencyMap) -> None:
        payload = encode_snapshot(freq)
        try:
            await self.redis.set(self.key, payload)
        except RedisError as e:
            raise PublishError(f"SET {self.key} failed: {e}") from e
        try:
            await self.redis.publish(self.channel, payload)
        except RedisError as e:
            # The stored copy is already current; subscribers catch up on reconnect.
            raise PublishError(f"PUBLISH {self.channel} failed: {e}") from e

    async def load_raw(self) -> Optional[str]:
        return await self.redis.get(self.key)

    async def load(self) -> Optional[FrequencyMap]:
        """Read the stored snapshot. None if nothing was ever published."""
        raw = await self.load_raw()
        if raw is None:
            return None
        return decode_snapshot(raw)
