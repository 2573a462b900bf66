#!/usr/bin/env python3
"""
CommentsDB - CSV comment ingestion service
==========================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging

from flask import Flask, request
from sqlalchemy.exc import SQLAlchemyError

import config
from api import EXTENSION_KEY, api_bp
from db import Database, init_db
from services.comments_service import count

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def create_app(db_url: str | None = None, db: Database | None = None) -> Flask:
    """
    Flask application factory.

    Pass an existing Database to share one pool between apps (tests do
    this); otherwise one is created from db_url / config.DB_URL.  The
    app owns whatever it creates and disposes of nothing on its own,
    see main() for shutdown.
    """
    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES
    app.json.sort_keys = False

    # ── Initialise database ─────────────────────────────────────────
    app.extensions[EXTENSION_KEY] = db or init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    @app.after_request
    def _log_request(response):
        logger.info("%s %s → %s", request.method, request.path, response.status_code)
        return response

    return app


def _seed_if_empty(db: Database):
    """Auto-import seed CSV when the database is empty."""
    existing = count(db)
    if existing > 0:
        logger.info("Database has %d comments", existing)
        return

    if not config.CSV_SEED_PATH.exists():
        logger.info("No seed CSV at %s - starting empty", config.CSV_SEED_PATH)
        return

    logger.info("Database empty → auto-importing %s", config.CSV_SEED_PATH.name)
    from import_engine import run_import

    with open(config.CSV_SEED_PATH, "rb") as fh:
        report = run_import(db, fh.read())

    logger.info("Seed done: %d imported, %d failed / %d rows",
                report.imported, report.failed, report.total_rows)
    for err in report.errors[:10]:
        logger.warning("  Row %d: %s", err.row, err.reason)


def main():
    configure_logging()

    app = create_app()
    db = app.extensions[EXTENSION_KEY]
    try:
        db.ping()
    except SQLAlchemyError:
        logger.exception("Failed to connect to %s", config.DB_URL)
        raise SystemExit(1)

    _seed_if_empty(db)

    logger.info("Listening on http://%s:%d", config.HOST, config.PORT)
    try:
        app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)
    finally:
        db.dispose()


if __name__ == "__main__":
    main()
