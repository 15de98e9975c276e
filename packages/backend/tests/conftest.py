"""Test fixtures — an in-memory Redis double and an HTTP client.

Learn: Nothing here needs a running Redis. FakeRedis implements just the
calls blogwords makes (get/set/publish/ping/pubsub) and records every
publish so tests can assert on what the poller sent.
"""

import asyncio

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from blogwords.main import app
from blogwords.realtime import pubsub as pubsub_module


class FakePubSub:
    """Replays queued messages, then blocks like a quiet channel."""

    def __init__(self, redis: "FakeRedis"):
        self.redis = redis
        self.channels: list[str] = []
        self.closed = False

    async def subscribe(self, *channels: str) -> None:
        self.channels.extend(channels)

    async def unsubscribe(self, *channels: str) -> None:
        for channel in channels:
            if channel in self.channels:
                self.channels.remove(channel)

    async def listen(self):
        for channel in list(self.channels):
            yield {"type": "subscribe", "channel": channel, "data": 1}
        for channel, data in self.redis.queued_messages:
            if channel in self.channels:
                yield {"type": "message", "channel": channel, "data": data}
        await asyncio.Event().wait()

    async def aclose(self) -> None:
        self.closed = True


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.published: list[tuple[str, str]] = []
        # Messages a new subscriber will receive after subscribing
        self.queued_messages: list[tuple[str, str]] = []
        self.fail_writes = False
        self.fail_publish = False
        self.fail_reads = False
        self.fail_ping = False
        self.pubsubs: list[FakePubSub] = []

    async def ping(self) -> bool:
        if self.fail_ping:
            raise RedisConnectionError("Connection refused")
        return True

    async def get(self, key: str):
        if self.fail_reads:
            raise RedisConnectionError("Connection reset by peer")
        return self.store.get(key)

    async def set(self, key: str, value: str) -> bool:
        if self.fail_writes:
            raise RedisConnectionError("Connection refused")
        self.store[key] = value
        return True

    async def publish(self, channel: str, message: str) -> int:
        if self.fail_writes or self.fail_publish:
            raise RedisConnectionError("Connection refused")
        self.published.append((channel, message))
        return 0

    def pubsub(self) -> FakePubSub:
        ps = FakePubSub(self)
        self.pubsubs.append(ps)
        return ps

    async def aclose(self) -> None:
        pass


@pytest.fixture()
def fake_redis(monkeypatch):
    """Install a FakeRedis as the process-wide connection."""
    r = FakeRedis()
    monkeypatch.setattr(pubsub_module, "_redis", r)
    return r


@pytest_asyncio.fixture()
async def client(fake_redis):
    """HTTP client for the app, backed by FakeRedis.

    Learn: ASGITransport does not run the lifespan, so init_redis() is
    never called — the fake installed above is what get_redis() returns.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
