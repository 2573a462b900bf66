"""
db - Database layer.

Public API:
    init_db()       → Database handle (engine + tables)
    Database        → owns the pool, hands out sessions
    Comment         → ORM model
"""

from db.engine import Database, init_db              # noqa: F401
from db.models import Base, Comment                  # noqa: F401
