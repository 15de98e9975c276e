"""Snapshot read endpoint — the catch-up path for clients.

Learn: WebSocket pushes are fire-and-forget. Anything that missed one
(or never opened a socket) reads the stored copy here. `top` trims the
map to the N most frequent words; totals always describe the full map.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from blogwords.errors import MalformedSnapshotError
from blogwords.realtime.pubsub import SnapshotStore
from blogwords.schemas.snapshot import SnapshotResponse
from blogwords.words import top_words

router = APIRouter()


@router.get("/snapshot", response_model=SnapshotResponse)
async def get_snapshot(top: Optional[int] = Query(None, ge=1)):
    """Return the latest published word counts, most frequent first."""
    store = SnapshotStore()
    try:
        freq = await store.load()
    except MalformedSnapshotError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if freq is None:
        raise HTTPException(status_code=404, detail="No snapshot published yet")

    return SnapshotResponse(
        key=store.key,
        total_words=sum(freq.values()),
        unique_words=len(freq),
        words=dict(top_words(freq, top)),
    )
