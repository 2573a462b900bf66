"""
services.upsert_service - The only write path for comment rows.

One commit() call = one transaction.  Rows are applied one statement
at a time, in input order, so a later duplicate comment_id in the same
batch overwrites the earlier one and a failure on any row rolls back
every row before it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.engine import Database
from db.models import Comment, utcnow

if TYPE_CHECKING:
    from import_engine.row_processor import CommentCandidate

logger = logging.getLogger(__name__)

# Columns replaced when comment_id already exists.  id and created_at
# are deliberately absent.
UPDATABLE_COLUMNS = ("post_id", "name", "email", "body")

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CommitError(RuntimeError):
    """Raised when a batch cannot be persisted.  Nothing was written."""


class Upserter:

    def __init__(self, db: Database):
        self._db = db

    def commit(self, records: Optional[Iterable["CommentCandidate"]]) -> int:
        """
        Insert-or-update every record atomically.
        Returns the number of records processed (inserts + updates).
        """
        records = list(records or [])
        if not records:
            return 0

        session = self._db.new_session()
        try:
            with session.begin():
                for record in records:
                    self._upsert_one(session, record.to_row())
        except (SQLAlchemyError, OverflowError, ValueError) as exc:
            # OverflowError/ValueError come straight from the DBAPI when a
            # bound value does not fit the column type
            logger.error("Commit of %d rows failed, rolled back", len(records), exc_info=True)
            raise CommitError(f"Failed to persist {len(records)} rows: {exc}") from exc
        finally:
            session.close()

        logger.info("Committed %d rows", len(records))
        return len(records)

    # ── Internal ───────────────────────────────────────────────────────

    def _upsert_one(self, session: Session, values: dict) -> None:
        insert = _DIALECT_INSERTS.get(self._db.dialect)
        if insert is None:
            self._merge_one(session, values)
            return

        stmt = insert(Comment).values(created_at=utcnow(), **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Comment.comment_id],
            set_={col: stmt.excluded[col] for col in UPDATABLE_COLUMNS},
        )
        session.execute(stmt)

    @staticmethod
    def _merge_one(session: Session, values: dict) -> None:
        """Portable fallback for backends without ON CONFLICT."""
        existing = session.scalars(
            select(Comment).where(Comment.comment_id == values["comment_id"])
        ).first()
        if existing is None:
            session.add(Comment(**values))
        else:
            for col in UPDATABLE_COLUMNS:
                setattr(existing, col, values[col])
        session.flush()
