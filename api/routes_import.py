"""
api.routes_import - /api/v1/upload endpoint.

Accepts CSV via multipart file upload or raw request body.
"""

import logging

from flask import request, jsonify

from api import api_bp, get_db
from api.errors import error_response
from import_engine import HeaderValidationError, run_import
from services.upsert_service import CommitError

logger = logging.getLogger(__name__)

CSV_MIMETYPES = ("text/csv", "application/vnd.ms-excel")


@api_bp.route("/upload", methods=["POST"])
def api_upload_csv():
    """
    POST /api/v1/upload

    Multipart: field name 'file' (.csv only)
    Or: raw CSV as request body (Content-Type: text/csv).
    """
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("file")
        if not f:
            return error_response("No file uploaded", 400)
        if f.mimetype not in CSV_MIMETYPES and not (f.filename or "").lower().endswith(".csv"):
            return error_response("Only CSV files are allowed", 400)
        filename = f.filename
        content = f.read()
    else:
        filename = "<request body>"
        content = request.get_data()

    if not content:
        return error_response("No file uploaded", 400)

    logger.info("Processing upload %s (%d bytes)", filename, len(content))
    try:
        report = run_import(get_db(), content)
    except HeaderValidationError as exc:
        logger.warning("Rejected %s: %s", filename, exc)
        return error_response(str(exc), 400, missing=list(exc.missing))
    except CommitError:
        return error_response("Failed to store CSV rows; nothing was saved", 500)

    return jsonify({
        "success": True,
        "message": "CSV processed successfully",
        "stats": report.to_dict(),
    }), 201
