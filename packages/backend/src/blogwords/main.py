"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (Redis pool and, when
BLOGWORDS_EMBED_POLLER is set, an in-process poller).

Normally the poller runs as its own process (`blogwords poll`); embedding
it is handy for single-container deployments.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from blogwords import __version__
from blogwords.api import api_router
from blogwords.config import settings

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    logger.info(
        "blogwords.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from blogwords.realtime.pubsub import close_redis, init_redis
    try:
        await init_redis()
        logger.info("blogwords.redis_connected", url=settings.redis_url)
    except Exception as e:
        logger.warning("blogwords.redis_unavailable", error=str(e))

    blog = poller = None
    if settings.embed_poller:
        from blogwords.fetcher.blog_client import BlogClient
        from blogwords.poller.loop import ChangeDetectionLoop

        blog = BlogClient()
        poller = ChangeDetectionLoop.from_settings(blog)
        poller.start()
        app.state.poller = poller

    yield

    logger.info("blogwords.shutdown")

    if poller is not None:
        await poller.stop()
        await blog.aclose()

    await close_redis()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="blogwords",
        description="Live word frequencies for a WordPress blog",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(api_router)

    from blogwords.realtime.websocket import router as ws_router
    app.include_router(ws_router)

    return app


# Default app instance (used by uvicorn: blogwords.main:app)
app = create_app()
