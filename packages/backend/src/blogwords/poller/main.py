"""Poller entry point — run as a separate process.

Learn: The poller is its own process, separate from the WebSocket
server. This provides crash isolation — if the poller dies, clients
stay connected and keep the last snapshot.

Usage:
    python -m blogwords.poller.main

Or via the CLI:
    blogwords poll
"""

import asyncio
import logging
import signal

from blogwords.config import settings
from blogwords.fetcher.blog_client import BlogClient
from blogwords.poller.loop import ChangeDetectionLoop
from blogwords.realtime.pubsub import close_redis, init_redis

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("blogwords.poller")


async def run():
    """Run the poller until interrupted."""
    await init_redis()
    stop_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    logger.info(
        "Poller starting (source: %s, every %.1fs)",
        settings.blog_api_url,
        settings.poll_interval,
    )

    async with BlogClient() as blog:
        poller = ChangeDetectionLoop.from_settings(blog)
        poller.start()
        try:
            await stop_event.wait()
        finally:
            await poller.stop()
            await close_redis()
            logger.info("Poller stopped. Stats: %s", poller.get_stats())


def main():
    """CLI entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
