"""
services - Business-logic layer sitting between API and DB.
"""

from services.search_service import Listing, ListingParams, SearchService   # noqa: F401
from services.upsert_service import CommitError, Upserter                   # noqa: F401
from services.comments_service import clear_all, count                      # noqa: F401
