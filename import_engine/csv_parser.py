"""
import_engine.csv_parser - Turn an uploaded blob into header + data rows.

The header row is the only thing that maps names to columns.  Names
are trimmed but stay case-sensitive; surplus columns ride along and are
ignored downstream.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, Iterator

from import_engine.field_map import REQUIRED_FIELDS


class HeaderValidationError(ValueError):
    """Raised when the header row lacks one or more required columns."""

    def __init__(self, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(f"Missing required headers: {', '.join(self.missing)}")


def open_reader(raw: str | bytes) -> tuple[list[str], Iterator[dict]]:
    """
    Return (header names, data rows).  Empty input has an empty header.
    Short rows come back padded with None, fully blank lines are skipped.
    """
    if isinstance(raw, bytes):
        text = raw.decode("utf-8-sig", errors="replace")
    else:
        text = raw.removeprefix("\ufeff")

    reader = csv.DictReader(io.StringIO(text, newline=""))
    reader.fieldnames = [name.strip() for name in reader.fieldnames or []]
    return reader.fieldnames, reader


def validate_headers(headers: Iterable[str] | None) -> list[str]:
    """Return the required headers absent from *headers*, in check order."""
    present = {h.strip() for h in (headers or []) if h is not None}
    return [name for name in REQUIRED_FIELDS if name not in present]
