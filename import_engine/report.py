"""
import_engine.report - Structured results of a CSV import run.

ParseResult   - what the ingestor hands to the upserter (never stored)
ImportReport  - what an upload caller shows to the user
"""

from __future__ import annotations

from dataclasses import dataclass, field

from import_engine.row_processor import CommentCandidate


@dataclass(frozen=True)
class ValidationError:
    row: int        # 1-indexed over data rows, header excluded
    reason: str

    def to_dict(self) -> dict:
        return {"row": self.row, "reason": self.reason}


@dataclass
class ParseResult:
    valid_records: list[CommentCandidate] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.valid_records) + len(self.errors)

    def add_error(self, row: int, reason: str):
        self.errors.append(ValidationError(row=row, reason=reason))


@dataclass
class ImportReport:
    total_rows: int = 0
    imported: int = 0
    failed: int = 0
    errors: list[ValidationError] = field(default_factory=list)

    @classmethod
    def from_parse(cls, result: ParseResult, imported: int) -> "ImportReport":
        return cls(
            total_rows=result.total_rows,
            imported=imported,
            failed=len(result.errors),
            errors=list(result.errors),
        )

    def to_dict(self) -> dict:
        return {
            "totalRows": self.total_rows,
            "successfulRows": self.imported,
            "failedRows": self.failed,
            "errors": [e.to_dict() for e in self.errors],
        }
