"""Journal entry store: ingestion, CRUD with ownership checks, and listing."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from moodlog.core.errors import EntryForbidden, EntryNotFound, StoreError
from moodlog.core.utils.pagination import Page, paginate
from moodlog.core.utils.timeutils import to_naive_utc
from moodlog.domains.journal.models import JournalEntry
from moodlog.domains.journal.mood import clamp_mood
from moodlog.domains.journal.services.annotation_service import TextModel, annotate
from moodlog.domains.journal.services.query_composer import EntryQuery, criteria, ordering
from moodlog.extensions import db

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("text", "tags", "created_at")


def create_entry(
    owner_id: int,
    *,
    text: str,
    mood_score: int,
    tags: Optional[List[str]] = None,
    created_at: Optional[datetime] = None,
) -> JournalEntry:
    if not (text or "").strip():
        raise ValueError("validation_error")
    entry = JournalEntry(
        user_id=owner_id,
        text=text,
        mood_score=clamp_mood(mood_score),
        tags=list(tags or []),
    )
    if created_at is not None:
        entry.created_at = to_naive_utc(created_at)
    db.session.add(entry)
    _commit("create")
    logger.info("Created journal entry id=%s user=%s", entry.id, owner_id)
    return entry


def ingest_entry(owner_id: int, text: str, client: TextModel) -> JournalEntry:
    """Annotate ``text`` and persist it. Nothing is stored before annotation finishes."""
    if not (text or "").strip():
        raise ValueError("validation_error")
    outcome = annotate(text, client)
    analysis = outcome.value
    return create_entry(owner_id, text=text, mood_score=analysis.mood_score, tags=analysis.tags)


def get_entry(entry_id: str) -> JournalEntry:
    entry = db.session.get(JournalEntry, entry_id)
    if entry is None:
        raise EntryNotFound()
    return entry


def get_owned_entry(entry_id: str, caller_id: int) -> JournalEntry:
    """Fetch an entry and apply the ownership guard."""
    entry = get_entry(entry_id)
    _require_owner(entry, caller_id)
    return entry


def update_entry(
    entry_id: str,
    caller_id: int,
    changes: dict,
    *,
    reannotate_with: Optional[TextModel] = None,
) -> JournalEntry:
    """Apply only the provided fields among text, tags and created_at.

    When ``reannotate_with`` is given and the text changes, the mood score
    is re-derived; re-derived tags are used only if the caller sent none.
    """
    entry = get_owned_entry(entry_id, caller_id)
    fields = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None}

    text_changed = "text" in fields and fields["text"] != entry.text
    if "text" in fields:
        entry.text = fields["text"]
    if "tags" in fields:
        entry.tags = list(fields["tags"])
    if "created_at" in fields:
        entry.created_at = to_naive_utc(fields["created_at"])

    if reannotate_with is not None and text_changed:
        analysis = annotate(entry.text, reannotate_with).value
        entry.mood_score = analysis.mood_score
        if "tags" not in fields:
            entry.tags = analysis.tags

    _commit("update")
    logger.info(
        "Updated journal entry id=%s user=%s fields=%s", entry.id, caller_id, sorted(fields)
    )
    return entry


def delete_entry(entry_id: str, caller_id: int) -> None:
    entry = get_owned_entry(entry_id, caller_id)
    db.session.delete(entry)
    _commit("delete")
    logger.info("Deleted journal entry id=%s user=%s", entry_id, caller_id)


def list_entries(query: EntryQuery) -> Page:
    """One page of the owner's entries plus the total match count."""
    q = JournalEntry.query.filter(*criteria(query)).order_by(*ordering(query.sort_by))
    try:
        return paginate(q, page=query.page, per_page=query.limit, max_per_page=query.limit)
    except SQLAlchemyError as exc:
        logger.exception("Listing journal entries failed for user=%s", query.owner_id)
        raise StoreError() from exc


def _require_owner(entry: JournalEntry, caller_id: int) -> None:
    if entry.user_id != caller_id:
        logger.info("Rejected access to entry id=%s by user=%s", entry.id, caller_id)
        raise EntryForbidden()


def _commit(action: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Journal %s failed", action)
        raise StoreError() from exc
