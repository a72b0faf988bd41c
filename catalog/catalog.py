"""
catalog.catalog - Read-only view of the application dictionary.

The import engine learns the target schema at run time through this
facade: which table a tab edits, each column's kind and length, and the
next primary key of a table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalog.display_types import ColumnKind, kind_for
from db.models import ADColumn, ADTab, ADTable
from services.sequence_service import next_primary_key


@dataclass(frozen=True)
class ColumnConstraints:
    max_length: int = 0             # 0 → no limit recorded


class Catalog:
    """
    Dictionary lookups for one session.

    Column metadata is cached per (table, column) for the lifetime of the
    instance; one import run uses one Catalog.
    """

    def __init__(self, session: Session):
        self.session = session
        self._columns: dict[tuple[str, str], Optional[ADColumn]] = {}

    def resolve_table_name(self, tab_id: int | None) -> Optional[str]:
        if not tab_id:
            return None
        stmt = (
            select(ADTable.table_name)
            .join(ADTab, ADTab.table_id == ADTable.id)
            .where(ADTab.id == tab_id)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def column_kind(self, table: str, column: str) -> ColumnKind:
        col = self._column(table, column)
        return kind_for(col.reference_id if col is not None else None)

    def column_constraints(self, table: str, column: str) -> ColumnConstraints:
        col = self._column(table, column)
        if col is None:
            return ColumnConstraints()
        return ColumnConstraints(max_length=col.field_length or 0)

    def table_has_column(self, table: str, column: str) -> bool:
        return self._column(table, column) is not None

    def next_primary_key(self, table: str) -> Optional[int]:
        """Next id from the table sequence, or None when none is registered."""
        return next_primary_key(self.session, table)

    # ── Private helpers ────────────────────────────────────────────────

    def _column(self, table: str, column: str) -> Optional[ADColumn]:
        key = (table.upper(), column.upper())
        if key not in self._columns:
            stmt = (
                select(ADColumn)
                .join(ADTable, ADColumn.table_id == ADTable.id)
                .where(func.upper(ADTable.table_name) == key[0])
                .where(func.upper(ADColumn.column_name) == key[1])
            )
            self._columns[key] = self.session.execute(stmt).scalars().first()
        return self._columns[key]
