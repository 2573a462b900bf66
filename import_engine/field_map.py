"""
import_engine.field_map - Column-name ↔ model-attribute mapping.

Order matters: validation walks REQUIRED_FIELDS front to back and
reports the first problem it finds.
"""

# CSV column name  →  Comment model attribute
REQUIRED_FIELDS: dict[str, str] = {
    "postId": "post_id",
    "id":     "comment_id",
    "name":   "name",
    "email":  "email",
    "body":   "body",
}

# Columns that must parse as whole numbers
NUMERIC_FIELDS = ("postId", "id")

# Columns run through the tag stripper before storage
SANITIZED_FIELDS = frozenset({"name", "body"})
