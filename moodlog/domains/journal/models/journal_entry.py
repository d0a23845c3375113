"""Persisted journal entry."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, validates

from moodlog.core.utils.timeutils import utcnow
from moodlog.extensions import db

TAG_INDEX_SEPARATOR = "\n"


def _new_entry_id() -> str:
    return uuid.uuid4().hex


class JournalEntry(db.Model):
    __tablename__ = "journal_entry"
    __table_args__ = (
        db.Index("ix_journal_entry_user_created_at", "user_id", "created_at"),
        db.Index("ix_journal_entry_user_mood_score", "user_id", "mood_score"),
        db.CheckConstraint("mood_score BETWEEN 1 AND 10", name="ck_journal_entry_mood_score_range"),
    )

    id: Mapped[str] = mapped_column(db.String(32), primary_key=True, default=_new_entry_id)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    text: Mapped[str] = mapped_column(db.Text, nullable=False)
    mood_score: Mapped[int] = mapped_column(db.Integer, nullable=False)
    tags: Mapped[list] = mapped_column(db.JSON, nullable=False, default=list)
    # Lower-cased in Python; SQLite lower() only folds ASCII.
    text_index: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    # Lower-cased tags joined by newlines; lets keyword search reach tags with LIKE.
    tags_index: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow, nullable=False)

    @validates("text")
    def _sync_text_index(self, _key, value):
        self.text_index = (value or "").lower()
        return value

    @validates("tags")
    def _sync_tags_index(self, _key, value):
        tags = [str(tag) for tag in (value or [])]
        self.tags_index = TAG_INDEX_SEPARATOR.join(tag.lower() for tag in tags)
        return tags

    def __repr__(self) -> str:
        return f"<JournalEntry {self.id} user={self.user_id} mood={self.mood_score}>"
