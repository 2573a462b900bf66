"""
api - REST API layer.

All route modules register on a single Flask Blueprint
with url_prefix /api/v1.
"""

from flask import Blueprint, current_app

from db.engine import Database

api_bp = Blueprint("api", __name__, url_prefix="/api/v1")

EXTENSION_KEY = "commentsdb"


def get_db() -> Database:
    """Storage handle installed by main.create_app()."""
    return current_app.extensions[EXTENSION_KEY]


# Import route modules so their @api_bp decorators execute
from api import routes_comments   # noqa: F401, E402
from api import routes_import     # noqa: F401, E402
from api import errors            # noqa: F401, E402
