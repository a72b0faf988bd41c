"""
import_engine.report - Structured result of an import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

INSERT = "insert"
UPDATE = "update"
SKIP = "skip"


@dataclass(frozen=True)
class RowOutcome:
    row: int
    action: str                     # insert | update | skip
    affected: int = 0
    detail: str = ""

    def to_dict(self) -> dict:
        return {"row": self.row, "action": self.action,
                "affected": self.affected, "detail": self.detail}


@dataclass
class ImportReport:
    table: Optional[str] = None
    mode: str = INSERT
    total_rows: int = 0
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    outcomes: list[RowOutcome] = field(default_factory=list)

    def add(self, outcome: RowOutcome):
        self.outcomes.append(outcome)
        if outcome.action == INSERT:
            self.inserted += outcome.affected
        elif outcome.action == UPDATE:
            self.updated += outcome.affected
        else:
            self.skipped += 1

    def summary(self) -> str:
        return f"Import finished. Inserted={self.inserted}, Updated={self.updated}"

    def to_dict(self) -> dict:
        return {
            "table": self.table,
            "mode": self.mode,
            "total_rows": self.total_rows,
            "inserted": self.inserted,
            "updated": self.updated,
            "skipped": self.skipped,
            "summary": self.summary(),
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
