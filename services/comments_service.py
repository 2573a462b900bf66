"""
services.comments_service - Administrative operations on the comments table.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select

from db.engine import Database
from db.models import Comment

logger = logging.getLogger(__name__)


def clear_all(db: Database) -> int:
    """Delete every stored comment.  Returns how many rows went."""
    with db.session() as session, session.begin():
        deleted = session.execute(delete(Comment)).rowcount
    logger.info("Deleted %d comments", deleted)
    return deleted


def count(db: Database) -> int:
    with db.session() as session:
        return session.scalar(select(func.count(Comment.id))) or 0
