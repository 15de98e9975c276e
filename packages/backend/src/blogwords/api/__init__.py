"""API route aggregation.

All routers registered here get mounted in main.py. Everything is
read-only and open; writes only ever come from the poller.
"""

from fastapi import APIRouter

from blogwords.api.health import router as health_router
from blogwords.api.snapshot import router as snapshot_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(snapshot_router, tags=["snapshot"])
