"""
import_engine - CSV import pipeline.

Public API:
    ingest(file_content)          → ParseResult
    run_import(db, file_content)  → ImportReport
"""

from import_engine.csv_parser import HeaderValidationError                  # noqa: F401
from import_engine.importer import ingest, run_import                       # noqa: F401
from import_engine.report import ImportReport, ParseResult, ValidationError # noqa: F401
from import_engine.row_processor import CommentCandidate, RowError          # noqa: F401
