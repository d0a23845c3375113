"""Pagination helper for SQLAlchemy queries."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List

from sqlalchemy.orm import Query


@dataclass
class Page:
    items: List[Any] = field(default_factory=list)
    page: int = 1
    limit: int = 20
    total: int = 0

    @property
    def pages(self) -> int:
        return page_count(self.total, self.limit)


def page_count(total: int, limit: int) -> int:
    """Number of pages for ``total`` rows; an empty result still has one page."""
    if limit <= 0:
        return 1
    return max(1, math.ceil(total / limit))


def paginate(query: Query, page: int = 1, per_page: int = 20, max_per_page: int = 100) -> Page:
    page = max(page, 1)
    per_page = max(min(per_page, max_per_page), 1)
    items = query.limit(per_page).offset((page - 1) * per_page).all()
    total = query.order_by(None).count()
    return Page(items=items, page=page, limit=per_page, total=total)
