"""
api.routes_comments - /api/v1/comments listing and admin endpoints.
"""

from flask import request, jsonify

from api import api_bp, get_db
from services.comments_service import clear_all
from services.search_service import SearchService


@api_bp.route("/comments")
def list_comments():
    """
    GET /api/v1/comments?page=1&limit=20&search=&sortBy=id&order=asc

    Search / list comments.  Bad parameters are clamped, not rejected.
    """
    listing = SearchService(get_db()).list(
        page=request.args.get("page"),
        limit=request.args.get("limit"),
        search=request.args.get("search"),
        sort_by=request.args.get("sortBy"),
        order=request.args.get("order"),
    )
    return jsonify({"success": True, **listing.to_dict()})


@api_bp.route("/comments", methods=["DELETE"])
def delete_all_comments():
    """DELETE /api/v1/comments  (wipes the table; testing/admin use)"""
    deleted = clear_all(get_db())
    return jsonify({
        "success": True,
        "message": f"Deleted {deleted} comments",
        "deletedCount": deleted,
    })


@api_bp.route("/health")
def health():
    get_db().ping()
    return jsonify({"status": "ok"})
