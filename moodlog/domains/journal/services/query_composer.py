"""Turns list filter parameters into criteria for the entry store.

All filters are conjunctive. Keyword search is the one disjunctive piece:
an entry matches when its text or any of its tags contains the term.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from moodlog.core.utils.timeutils import end_of_day, start_of_day
from moodlog.domains.journal.models import JournalEntry
from moodlog.domains.journal.models.journal_entry import TAG_INDEX_SEPARATOR
from moodlog.domains.journal.mood import (
    BUCKET_HAPPY,
    BUCKET_NEUTRAL,
    BUCKET_SAD,
    HAPPY_MIN,
    NEUTRAL_MIN,
)
from moodlog.domains.journal.schemas.journal_schemas import JournalEntryListFilter

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 8
MAX_LIMIT = 100

SORT_LATEST = "latest"
SORT_OLDEST = "oldest"
SORT_HIGHEST = "highest"
SORT_LOWEST = "lowest"


@dataclass(frozen=True)
class EntryQuery:
    """Normalized listing request, always scoped to one owner."""

    owner_id: int
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    mood: str = "all"
    search: Optional[str] = None
    sort_by: str = SORT_LATEST

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def compose_query(
    owner_id: int,
    filters: JournalEntryListFilter,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> EntryQuery:
    limit = filters.limit or default_limit
    return EntryQuery(
        owner_id=owner_id,
        page=max(filters.page, 1),
        limit=max(1, min(limit, max_limit)),
        start=start_of_day(filters.start_date) if filters.start_date else None,
        end=end_of_day(filters.end_date) if filters.end_date else None,
        mood=filters.mood,
        search=filters.search,
        sort_by=filters.sort_by,
    )


def criteria(query: EntryQuery) -> List[ColumnElement]:
    clauses: List[ColumnElement] = [JournalEntry.user_id == query.owner_id]

    if query.start is not None:
        clauses.append(JournalEntry.created_at >= query.start)
    if query.end is not None:
        clauses.append(JournalEntry.created_at <= query.end)

    if query.mood == BUCKET_HAPPY:
        clauses.append(JournalEntry.mood_score >= HAPPY_MIN)
    elif query.mood == BUCKET_NEUTRAL:
        clauses.append(JournalEntry.mood_score >= NEUTRAL_MIN)
        clauses.append(JournalEntry.mood_score < HAPPY_MIN)
    elif query.mood == BUCKET_SAD:
        clauses.append(JournalEntry.mood_score < NEUTRAL_MIN)

    if query.search:
        term = query.search.replace(TAG_INDEX_SEPARATOR, " ").lower()
        clauses.append(
            or_(
                JournalEntry.text_index.contains(term, autoescape=True),
                JournalEntry.tags_index.contains(term, autoescape=True),
            )
        )
    return clauses


def ordering(sort_by: str) -> Tuple[ColumnElement, ...]:
    """Sort columns for ``sort_by``; entry id breaks ties for stable paging."""
    if sort_by == SORT_OLDEST:
        return (JournalEntry.created_at.asc(), JournalEntry.id.asc())
    if sort_by == SORT_HIGHEST:
        return (JournalEntry.mood_score.desc(), JournalEntry.created_at.desc(), JournalEntry.id.asc())
    if sort_by == SORT_LOWEST:
        return (JournalEntry.mood_score.asc(), JournalEntry.created_at.desc(), JournalEntry.id.asc())
    return (JournalEntry.created_at.desc(), JournalEntry.id.desc())
