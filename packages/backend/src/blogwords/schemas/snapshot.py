"""Pydantic schemas for the snapshot API."""

from pydantic import BaseModel, Field


class SnapshotResponse(BaseModel):
    key: str
    total_words: int = Field(ge=0)
    unique_words: int = Field(ge=0)
    words: dict[str, int]
