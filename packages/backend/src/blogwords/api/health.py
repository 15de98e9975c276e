"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running and
Redis is reachable. The poller runs elsewhere, so its health shows up
only indirectly (a stale or missing snapshot).
"""

from fastapi import APIRouter

from blogwords import __version__
from blogwords.realtime.pubsub import get_redis

router = APIRouter()


@router.get("/health")
async def health_check():
    """Check server health and Redis connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await get_redis().ping()
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"error: {e}"

    status = "healthy" if checks["redis"] == "ok" else "degraded"
    return {"status": status, **checks}
