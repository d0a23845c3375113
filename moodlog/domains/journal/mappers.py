"""Journal mappers for DTO responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from moodlog.core.utils.pagination import Page
from moodlog.domains.journal.models import JournalEntry
from moodlog.domains.journal.mood import mood_bucket
from moodlog.domains.journal.schemas.journal_schemas import (
    JournalEntryResponse,
    PaginationResponse,
)


def _iso(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.isoformat(timespec="milliseconds") + "Z"


def map_entry(entry: JournalEntry) -> dict:
    return JournalEntryResponse(
        id=entry.id,
        owner_id=entry.user_id,
        text=entry.text,
        mood_score=entry.mood_score,
        mood_bucket=mood_bucket(entry.mood_score),
        tags=list(entry.tags or []),
        created_at=_iso(entry.created_at),
        updated_at=_iso(entry.updated_at),
    ).model_dump(by_alias=True)


def map_page(page: Page) -> dict:
    return {
        "entries": [map_entry(e) for e in page.items],
        "pagination": PaginationResponse(
            total=page.total, pages=page.pages, page=page.page, limit=page.limit
        ).model_dump(),
    }
