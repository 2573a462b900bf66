"""
api.errors - JSON error handlers for the API blueprint.
"""

import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import RequestEntityTooLarge

import config
from api import api_bp

logger = logging.getLogger(__name__)


def error_response(message: str, status: int, **extra):
    return jsonify({"success": False, "error": message, **extra}), status


@api_bp.app_errorhandler(404)
def api_not_found(_e):
    return error_response("Route not found", 404)


@api_bp.app_errorhandler(405)
def api_method_not_allowed(_e):
    return error_response("Method not allowed", 405)


@api_bp.app_errorhandler(RequestEntityTooLarge)
def api_too_large(_e):
    limit_mib = config.MAX_UPLOAD_BYTES // (1024 * 1024)
    return error_response(f"File too large (limit {limit_mib} MiB)", 413)


@api_bp.errorhandler(SQLAlchemyError)
def api_storage_error(exc):
    logger.error("Storage failure: %s", exc, exc_info=exc)
    return error_response("Storage unavailable", 500)


@api_bp.app_errorhandler(500)
def api_server_error(_e):
    return error_response("Internal server error", 500)
