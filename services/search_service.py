"""
services.search_service - Text search and paginated listing.

Builds SQLAlchemy queries with an optional case-insensitive substring
filter across the text columns and the stringified numeric ids.

Sort column and direction are picked from closed sets before they reach
the query; the search term, limit and offset are always bound
parameters.

The window and the total count are two independent reads issued
concurrently on separate pooled connections.  Under concurrent writers
they are not a consistent snapshot: a row committed between the two
reads can be counted without appearing in the window, or the reverse.
"""

from __future__ import annotations

import math
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy import Select, String, cast, func, or_, select

import config
from db.engine import Database
from db.models import Comment

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

# Largest OFFSET a signed 64-bit SQL integer can carry
MAX_OFFSET = 2 ** 63 - 1


def _parse_int(value: Any) -> Optional[int]:
    """Leading-integer parse: 12 → 12, "3abc" → 3, "abc" → None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX_RE.match(str(value))
    return int(match.group(1)) if match else None


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class ListingParams:
    page: int = 1
    limit: int = config.DEFAULT_PAGE_SIZE
    search: str = ""
    sort_by: str = "id"
    order: str = "asc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def normalize(
        cls,
        page: Any = None,
        limit: Any = None,
        search: Any = None,
        sort_by: Any = None,
        order: Any = None,
    ) -> "ListingParams":
        """Clamp/whitelist raw caller input.  Never raises."""
        # 0 and unparseable values count as "not given", like a blank query arg
        page = _parse_int(page) or 1
        limit = min(config.MAX_PAGE_SIZE, max(1, _parse_int(limit) or config.DEFAULT_PAGE_SIZE))
        # Cap page so (page - 1) * limit still binds as an integer
        max_page = MAX_OFFSET // limit
        return cls(
            page=min(max_page, max(1, page)),
            limit=limit,
            search=search.strip() if isinstance(search, str) else "",
            sort_by=sort_by if isinstance(sort_by, str) and sort_by in SearchService.SORTABLE_COLUMNS else "id",
            order="desc" if isinstance(order, str) and order.lower() == "desc" else "asc",
        )


@dataclass
class Listing:
    records: list[Comment] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = config.DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def pagination(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }

    def to_dict(self) -> dict:
        return {
            "data": [c.to_dict() for c in self.records],
            "pagination": self.pagination(),
        }


class SearchService:

    # Sortable columns mapping (public name → column)
    SORTABLE_COLUMNS = {
        "id": Comment.id,
        "postId": Comment.post_id,
        "name": Comment.name,
        "email": Comment.email,
        "createdAt": Comment.created_at,
    }

    def __init__(self, db: Database):
        self._db = db

    def list(
        self,
        page: Any = None,
        limit: Any = None,
        search: Any = None,
        sort_by: Any = None,
        order: Any = None,
    ) -> Listing:
        """
        Return one page of comments plus pagination metadata.
        Out-of-range or malformed parameters are clamped, never rejected.
        """
        params = ListingParams.normalize(page, limit, search, sort_by, order)

        with ThreadPoolExecutor(max_workers=2) as pool:
            window = pool.submit(self._fetch_window, params)
            total = pool.submit(self._fetch_total, params)
            records, count = window.result(), total.result()

        return Listing(records=records, total=count, page=params.page, limit=params.limit)

    @classmethod
    def window_statement(cls, params: ListingParams) -> Select:
        """The SELECT for one page, before it is bound to a session."""
        sort_col = cls.SORTABLE_COLUMNS[params.sort_by]
        direction = sort_col.desc() if params.order == "desc" else sort_col.asc()

        stmt = cls._apply_text_filter(select(Comment), params.search)
        stmt = stmt.order_by(direction)
        if sort_col is not Comment.id:
            # Tie-break on id so pages never overlap
            stmt = stmt.order_by(Comment.id.asc())
        return stmt.limit(params.limit).offset(params.offset)

    # ── Internal ───────────────────────────────────────────────────────

    def _fetch_window(self, params: ListingParams) -> list[Comment]:
        stmt = self.window_statement(params)
        with self._db.session() as session:
            return list(session.scalars(stmt))

    def _fetch_total(self, params: ListingParams) -> int:
        stmt = self._apply_text_filter(select(func.count(Comment.id)), params.search)
        with self._db.session() as session:
            return session.scalar(stmt) or 0

    @staticmethod
    def _apply_text_filter(stmt: Select, q: str) -> Select:
        if not q:
            return stmt
        like = f"%{_escape_like(q)}%"
        return stmt.where(or_(
            Comment.name.ilike(like, escape="\\"),
            Comment.email.ilike(like, escape="\\"),
            Comment.body.ilike(like, escape="\\"),
            cast(Comment.post_id, String).ilike(like, escape="\\"),
            cast(Comment.comment_id, String).ilike(like, escape="\\"),
        ))
