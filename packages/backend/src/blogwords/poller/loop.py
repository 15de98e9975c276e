"""Change-detection loop — fetch → count → compare → publish.

Learn: The loop owns exactly one piece of state, the last frequency map
it published. Each tick rebuilds the map from scratch and only touches
Redis when the new map differs from that one. Nothing else may read or
write the snapshot; callers get a copy via `last_published`.

Failure handling per tick:
- fetch failed      → logged, counted as an empty post list, tick continues
- publish failed    → PublishError raised to the caller; the next tick
                      publishes even if its map matches the old snapshot
- tick already busy → the new tick is skipped (no overlap on the snapshot)
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, Optional, Protocol

import structlog

from blogwords.errors import FetchError
from blogwords.fetcher.blog_client import FetchFailure, FetchResult, FetchSuccess
from blogwords.poller.scheduler import PeriodicTask
from blogwords.words import FrequencyMap, count_words, maps_equal

logger = structlog.get_logger()


class DocumentSource(Protocol):
    def fetch_documents(self) -> Awaitable[FetchResult]: ...


class SnapshotPublisher(Protocol):
    def publish(self, freq: FrequencyMap) -> Awaitable[None]: ...


class TickStatus(str, enum.Enum):
    PUBLISHED = "published"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class TickOutcome:
    status: TickStatus
    fetch_failed: bool = False
    words: FrequencyMap = field(default_factory=dict)


@dataclass
class LoopStats:
    """Runtime statistics for monitoring."""
    ticks: int = 0
    published: int = 0
    unchanged: int = 0
    skipped: int = 0
    fetch_failures: int = 0
    publish_failures: int = 0
    started_at: Optional[datetime] = None
    last_published_at: Optional[datetime] = None


class ChangeDetectionLoop:
    """Republishes the blog's word counts whenever they change.

    Usage:
        loop = ChangeDetectionLoop(BlogClient(), SnapshotStore())
        loop.start()              # tick now, then every interval
        ...
        await loop.stop()

    Tests drive it one step at a time with `await loop.tick()`.
    """

    def __init__(
        self,
        source: DocumentSource,
        publisher: SnapshotPublisher,
        *,
        interval: float = 10.0,
        keep_snapshot_on_fetch_failure: bool = False,
    ):
        self.source = source
        self.publisher = publisher
        self.interval = interval
        self.keep_snapshot_on_fetch_failure = keep_snapshot_on_fetch_failure
        self.stats = LoopStats()
        self._last_published: FrequencyMap = {}
        self._busy = False
        # Set when a publish failed part-way; Redis may then hold a map we never recorded.
        self._stale = False
        self._schedule: Optional[PeriodicTask] = None

    @classmethod
    def from_settings(cls, source: DocumentSource) -> "ChangeDetectionLoop":
        """Wire a loop to the given source and the configured Redis store."""
        from blogwords.config import settings
        from blogwords.realtime.pubsub import SnapshotStore

        return cls(
            source,
            SnapshotStore(),
            interval=settings.poll_interval,
            keep_snapshot_on_fetch_failure=settings.keep_snapshot_on_fetch_failure,
        )

    @property
    def last_published(self) -> FrequencyMap:
        return dict(self._last_published)

    @property
    def running(self) -> bool:
        return self._schedule is not None and self._schedule.running

    # ─── Lifecycle ────────────────────────────────────────

    def start(self) -> PeriodicTask:
        """Tick immediately, then every `interval` seconds."""
        if self.running:
            raise RuntimeError("loop already started")
        self._schedule = PeriodicTask(self.tick, self.interval, name="poller")
        self.stats.started_at = datetime.now(timezone.utc)
        self._schedule.start()
        logger.info("poller.started", interval=self.interval)
        return self._schedule

    async def stop(self) -> None:
        if self._schedule is not None:
            await self._schedule.cancel()
            self._schedule = None
        logger.info(
            "poller.stopped",
            ticks=self.stats.ticks,
            published=self.stats.published,
            fetch_failures=self.stats.fetch_failures,
        )

    # ─── One tick ─────────────────────────────────────────

    async def tick(self) -> TickOutcome:
        if self._busy:
            self.stats.skipped += 1
            logger.warning("poller.tick_skipped", reason="previous tick still running")
            return TickOutcome(TickStatus.SKIPPED)

        self._busy = True
        try:
            return await self._tick()
        finally:
            self._busy = False

    async def _tick(self) -> TickOutcome:
        self.stats.ticks += 1
        result = await self._fetch()
        fetch_failed = isinstance(result, FetchFailure)

        if fetch_failed:
            self.stats.fetch_failures += 1
            logger.error("poller.fetch_failed", error=str(result.error))
            if self.keep_snapshot_on_fetch_failure:
                return TickOutcome(TickStatus.UNCHANGED, fetch_failed=True)

        current = count_words(result.documents)

        if not self._stale and maps_equal(self._last_published, current):
            self.stats.unchanged += 1
            logger.debug("poller.tick_unchanged", unique_words=len(current))
            return TickOutcome(TickStatus.UNCHANGED, fetch_failed, dict(current))

        try:
            await self.publisher.publish(current)
        except Exception:
            self.stats.publish_failures += 1
            self._stale = True
            raise

        self._last_published = dict(current)
        self._stale = False
        self.stats.published += 1
        self.stats.last_published_at = datetime.now(timezone.utc)
        logger.info(
            "poller.tick_published",
            unique_words=len(current),
            total_words=sum(current.values()),
        )
        return TickOutcome(TickStatus.PUBLISHED, fetch_failed, dict(current))

    async def _fetch(self) -> FetchResult:
        """Call the source; an unexpected exception counts as a failed fetch."""
        try:
            result = await self.source.fetch_documents()
        except Exception as e:
            error = e if isinstance(e, FetchError) else FetchError(repr(e))
            if error is not e:
                error.__cause__ = e
            return FetchFailure(error)
        if not isinstance(result, (FetchSuccess, FetchFailure)):
            return FetchSuccess(tuple(result))
        return result

    def get_stats(self) -> dict:
        """Return loop statistics for monitoring."""
        return {
            "ticks": self.stats.ticks,
            "published": self.stats.published,
            "unchanged": self.stats.unchanged,
            "skipped": self.stats.skipped,
            "fetch_failures": self.stats.fetch_failures,
            "publish_failures": self.stats.publish_failures,
            "unique_words": len(self._last_published),
            "started_at": (
                self.stats.started_at.isoformat() if self.stats.started_at else None
            ),
            "last_published_at": (
                self.stats.last_published_at.isoformat()
                if self.stats.last_published_at
                else None
            ),
        }
