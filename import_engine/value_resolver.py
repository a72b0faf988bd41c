"""
import_engine.value_resolver - Turn one raw cell into a typed value.

Resolution order for a cell:
  1. ""/missing/"(null)"                     → None
  2. numeric column and an all-digit cell    → int / Decimal, no lookup
  3. token has [LookupColumn]                → single-row lookup
  4. otherwise                               → cast by the column's kind

Casting is driven by the dictionary (catalog.ColumnKind), never by the
column name.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from catalog import Catalog, ColumnKind
from import_engine.errors import (
    LookupAmbiguousError,
    LookupNotFoundError,
    TypeCastError,
)
from import_engine.field_spec import FieldSpec
from import_engine.identifiers import checked

logger = logging.getLogger(__name__)

NULL_TOKEN = "(null)"

_DIGITS = re.compile(r"^[0-9]+$")
_INTEGER = re.compile(r"^[+-]?[0-9]+$")
_DECIMAL = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")

_YES = frozenset({"y", "yes", "true", "1", "s", "si", "sí"})
_NO = frozenset({"n", "no", "false", "0"})


def is_null(raw: Optional[str]) -> bool:
    return raw is None or raw == "" or raw.lower() == NULL_TOKEN


class ValueResolver:
    """Resolves cells for one target table within one session."""

    def __init__(self, session: Session, catalog: Catalog, table: str):
        self.session = session
        self.catalog = catalog
        self.table = table

    def resolve(self, spec: FieldSpec, raw: Optional[str], row: int) -> Any:
        if is_null(raw):
            return None

        kind = self.catalog.column_kind(self.table, spec.target_column)

        # All-digit cells in numeric columns are taken as literal ids,
        # even when a lookup is configured.
        if kind.is_numeric and _DIGITS.match(raw):
            return int(raw) if kind is ColumnKind.INTEGER else Decimal(raw)

        if spec.lookup_column is not None:
            return self._lookup(spec, raw, row, kind)

        return self._cast(spec, raw, row, kind)

    # ── Lookup ─────────────────────────────────────────────────────────

    def _lookup(self, spec: FieldSpec, raw: str, row: int, kind: ColumnKind) -> Any:
        table = checked(spec.lookup_table, spec=spec)
        target = checked(spec.target_column, spec=spec)
        lookup_col = checked(spec.lookup_column, spec=spec)
        params = {"value": raw}

        count = self.session.execute(
            text(f"SELECT COUNT(*) FROM {table} WHERE {lookup_col} = :value"),
            params,
        ).scalar_one()
        if count <= 0:
            raise LookupNotFoundError(
                row=row, column=spec.column_index, token=spec.label,
                value=raw, table=table, lookup_column=lookup_col,
            )
        if count > 1:
            raise LookupAmbiguousError(
                row=row, column=spec.column_index, token=spec.label,
                value=raw, table=table, lookup_column=lookup_col,
                matches=count,
            )

        value = self.session.execute(
            text(f"SELECT {target} FROM {table} WHERE {lookup_col} = :value"),
            params,
        ).scalar_one()
        logger.debug("row %d: %s.%s=%r → %s=%r",
                     row, table, lookup_col, raw, target, value)
        return _normalize_number(value, kind)

    # ── Casting ────────────────────────────────────────────────────────

    def _cast(self, spec: FieldSpec, raw: str, row: int, kind: ColumnKind) -> Any:
        column = spec.target_column

        def fail(reason: str, cause: Optional[BaseException] = None):
            return TypeCastError(
                f"{reason} for column {self.table}.{column}",
                row=row, column=spec.column_index, token=spec.label,
                value=raw, cause=cause,
            )

        if kind is ColumnKind.TEXT:
            max_len = self.catalog.column_constraints(self.table, column).max_length
            if max_len and len(raw) > max_len:
                raise fail(f"value too long: '{raw}' (max={max_len}, len={len(raw)})")
            return raw

        if kind is ColumnKind.INTEGER:
            if not _INTEGER.match(raw):
                raise fail(f"expected an integer, got '{raw}'")
            return int(raw)

        if kind is ColumnKind.DECIMAL:
            # Plain notation only: no digit separators, NaN or Infinity.
            if not _DECIMAL.match(raw):
                raise fail(f"expected a number, got '{raw}'")
            return Decimal(raw)

        if kind is ColumnKind.BOOLEAN:
            flag = raw.lower()
            if flag in _YES:
                return "Y"
            if flag in _NO:
                return "N"
            raise fail(f"expected Y/N, got '{raw}'")

        if kind is ColumnKind.TEMPORAL:
            try:
                if len(raw) == 10:
                    return date.fromisoformat(raw)
                return datetime.fromisoformat(raw)
            except ValueError as exc:
                raise fail(f"expected a date (yyyy-mm-dd[ hh:mm:ss]), got '{raw}'",
                           exc) from exc

        return raw


def _normalize_number(value: Any, kind: ColumnKind) -> Any:
    """Drivers may hand back ids as text; match the column's kind."""
    if value is None or not isinstance(value, str):
        return value
    if kind is ColumnKind.INTEGER and _DIGITS.match(value):
        return int(value)
    if kind is ColumnKind.DECIMAL:
        try:
            return Decimal(value)
        except InvalidOperation:
            return value
    return value
