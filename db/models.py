"""
db.models - SQLAlchemy ORM declarations.

Tables
------
comments   - one row per unique comment_id.  post_id and email carry
             secondary indexes because the listing search filters on them.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Comment(Base):
    __tablename__ = "comments"

    # ── Surrogate key ──────────────────────────────────────────────────
    id = Column(Integer, primary_key=True, autoincrement=True)

    # ── Identity from the source file ──────────────────────────────────
    post_id    = Column(Integer, nullable=False, index=True)
    comment_id = Column(Integer, nullable=False, unique=True)   # conflict key

    # ── Content ────────────────────────────────────────────────────────
    name  = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    body  = Column(Text, nullable=False)

    # ── Timestamps ─────────────────────────────────────────────────────
    # Written on first insert only; upserts never touch it.
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "postId": self.post_id,
            "commentId": self.comment_id,
            "name": self.name,
            "email": self.email,
            "body": self.body,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Comment id={self.id} comment_id={self.comment_id}>"
