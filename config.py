"""
CommentsDB - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path

import dotenv


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR      = Path(__file__).resolve().parent

# Load .env from the repo root before anything reads the environment
dotenv.load_dotenv(BASE_DIR / ".env")

CSV_SEED_PATH = Path(os.environ.get("COMMENTSDB_CSV_SEED", BASE_DIR / "comments_seed.csv"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL          = os.environ.get("COMMENTSDB_DB", f"sqlite:///{BASE_DIR / 'commentsdb.sqlite'}")
DB_POOL_SIZE    = int(os.environ.get("COMMENTSDB_DB_POOL_SIZE", "20"))
DB_MAX_OVERFLOW = int(os.environ.get("COMMENTSDB_DB_MAX_OVERFLOW", "0"))
DB_POOL_TIMEOUT = float(os.environ.get("COMMENTSDB_DB_POOL_TIMEOUT", "2"))
DB_ECHO         = os.environ.get("COMMENTSDB_DB_ECHO", "0") == "1"

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("COMMENTSDB_HOST", "0.0.0.0")
PORT   = int(os.environ.get("COMMENTSDB_PORT", "3001"))
DEBUG  = os.environ.get("COMMENTSDB_DEBUG", "0") == "1"
SECRET = os.environ.get("COMMENTSDB_SECRET", "commentsdb-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("COMMENTSDB_LOG_LEVEL", "INFO").upper()

# ── Upload ─────────────────────────────────────────────────────────────
MAX_UPLOAD_BYTES = int(os.environ.get("COMMENTSDB_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

# ── Pagination ─────────────────────────────────────────────────────────
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE     = 100
