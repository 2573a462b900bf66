"""
import_engine.row_processor - Validate and normalise one CSV row.

Single-responsibility: given a dict-row, either return a
CommentCandidate ready for commit, or raise RowError.  No I/O.

Checks run in a fixed order and stop at the first failure, so every
invalid row yields exactly one reason:

    1. presence   postId, id, name, email, body
    2. type       postId, id
    3. format     email
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from import_engine.field_map import REQUIRED_FIELDS, NUMERIC_FIELDS

EMAIL_RE   = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NUMBER_RE  = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
TAG_RE     = re.compile(r"<[^>]*>")

# Signed 32-bit, the width of an INTEGER column on PostgreSQL
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


class RowError(Exception):
    """Raised when a row cannot be imported."""
    pass


@dataclass(frozen=True)
class CommentCandidate:
    """A validated, normalised row that has not been stored yet."""
    post_id: int
    comment_id: int
    name: str
    email: str
    body: str

    def to_row(self) -> dict:
        return {
            "post_id": self.post_id,
            "comment_id": self.comment_id,
            "name": self.name,
            "email": self.email,
            "body": self.body,
        }


def sanitize_text(value: str) -> str:
    """Remove anything that looks like an HTML tag, then trim."""
    return TAG_RE.sub("", value).strip()


def is_valid_email(value: str) -> bool:
    return EMAIL_RE.match(value) is not None


def parse_number(value: str) -> Optional[float]:
    """
    Parse integer or decimal text.  Returns None for anything that is
    not a finite number (garbage, NaN, Infinity, overflow).
    """
    value = value.strip()
    if not NUMBER_RE.match(value):
        return None
    num = float(value)
    if not math.isfinite(num):
        return None
    return num


def validate_row(row: Mapping[str, Optional[str]], row_number: int) -> CommentCandidate:
    """
    Validate one data row (1-indexed, header excluded).
    Raises RowError carrying the first rule the row breaks.
    """
    values: dict[str, str] = {}
    for field in REQUIRED_FIELDS:
        raw = row.get(field)
        val = raw.strip() if isinstance(raw, str) else ""
        if not val:
            raise RowError(f"Missing required field: {field}")
        values[field] = val

    numbers: dict[str, int] = {}
    for field in NUMERIC_FIELDS:
        num = parse_number(values[field])
        # Stored in integer columns, so the number has to be whole and fit
        if num is None or not num.is_integer() or not INT_MIN <= num <= INT_MAX:
            raise RowError(f"{field} must be a valid number")
        numbers[field] = int(num)

    if not is_valid_email(values["email"]):
        raise RowError("Invalid email format")

    return CommentCandidate(
        post_id=numbers["postId"],
        comment_id=numbers["id"],
        name=sanitize_text(values["name"]),
        email=values["email"].lower(),
        body=sanitize_text(values["body"]),
    )
