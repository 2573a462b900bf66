"""
import_engine.importer - Top-level orchestrator.

Coordinates csv_parser → row_processor → Upserter and produces
a structured ImportReport.
"""

from __future__ import annotations

import logging

from db.engine import Database
from import_engine.csv_parser import HeaderValidationError, open_reader, validate_headers
from import_engine.row_processor import RowError, validate_row
from import_engine.report import ImportReport, ParseResult
from services.upsert_service import Upserter

logger = logging.getLogger(__name__)


def ingest(file_content: str | bytes) -> ParseResult:
    """
    Parse and validate a CSV blob without touching the database.

    Raises HeaderValidationError if a required column is missing from
    the header row; in that case no data row is looked at.  Problems in
    individual rows never raise, they end up in ParseResult.errors.
    """
    headers, rows = open_reader(file_content)
    missing = validate_headers(headers)
    if missing:
        raise HeaderValidationError(missing)

    result = ParseResult()
    for row_number, row in enumerate(rows, start=1):   # header excluded
        try:
            result.valid_records.append(validate_row(row, row_number))
        except RowError as exc:
            logger.debug("Row %d rejected: %s", row_number, exc)
            result.add_error(row_number, str(exc))

    logger.info(
        "Parsed %d rows: %d valid, %d invalid",
        result.total_rows, len(result.valid_records), len(result.errors),
    )
    return result


def run_import(db: Database, file_content: str | bytes) -> ImportReport:
    """
    Ingest a CSV blob and commit its valid rows in one transaction.

    Parameters
    ----------
    db : storage handle the rows are written to
    file_content : raw CSV (bytes or str)

    Returns
    -------
    ImportReport with per-row error details

    HeaderValidationError and CommitError propagate; both mean nothing
    was written.
    """
    result = ingest(file_content)
    imported = Upserter(db).commit(result.valid_records)
    return ImportReport.from_parse(result, imported)
