"""
import_engine.statement_builder - Dynamic INSERT / UPDATE per row.

INSERT fills in the system columns a row does not supply (primary key,
client/org, IsActive, audit columns, UUID).  UPDATE targets rows by the
/K columns, or the whole client when the header has none.

Column and table names are validated identifiers; every value is bound.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional, Sequence

from sqlalchemy import bindparam, text
from sqlalchemy.orm import Session

from catalog import Catalog
from db.models import ImportTemplate
from import_engine.context import ExecutionContext
from import_engine.defaults import first_non_zero
from import_engine.errors import RecordNotFoundError, SequenceExhaustionError
from import_engine.field_spec import FieldSpec
from import_engine.identifiers import checked
from import_engine.report import INSERT, SKIP, UPDATE, RowOutcome

logger = logging.getLogger(__name__)

CLIENT_COLUMN = "AD_Client_ID"
ORG_COLUMN = "AD_Org_ID"
ACTIVE_COLUMN = "IsActive"
UUID_COLUMN = "UUID"


def build_insert(table: str, columns: dict[str, Any]):
    """Parameterised INSERT naming exactly ``columns`` in their order."""
    names = [checked(c) for c in columns]
    params = [bindparam(f"v{i}", v) for i, v in enumerate(columns.values())]
    sql = (f"INSERT INTO {checked(table)} ({', '.join(names)}) "
           f"VALUES ({', '.join(':' + p.key for p in params)})")
    return text(sql).bindparams(*params)


def build_update(table: str, sets: dict[str, Any], where: Sequence[tuple[str, Any]]):
    """UPDATE ``table`` SET sets WHERE AND-joined equalities."""
    set_params = [bindparam(f"s{i}", v) for i, v in enumerate(sets.values())]
    where_params = [bindparam(f"w{i}", v) for i, (_, v) in enumerate(where)]
    set_sql = ", ".join(f"{checked(c)} = :{p.key}"
                        for c, p in zip(sets, set_params))
    where_sql = " AND ".join(f"{checked(c)} = :{p.key}"
                             for (c, _), p in zip(where, where_params))
    sql = f"UPDATE {checked(table)} SET {set_sql} WHERE {where_sql}"
    return text(sql).bindparams(*set_params, *where_params)


def _key_in(columns: dict[str, Any], name: str) -> Optional[str]:
    """The key of ``columns`` matching ``name`` case-insensitively."""
    if name in columns:
        return name
    upper = name.upper()
    for key in columns:
        if key.upper() == upper:
            return key
    return None


def _absent(columns: dict[str, Any], name: str) -> bool:
    key = _key_in(columns, name)
    return key is None or columns[key] is None


def _put_if_absent(columns: dict[str, Any], name: str, value: Any):
    key = _key_in(columns, name) or name
    if columns.get(key) is None:
        columns[key] = value


def _predicate(where: Sequence[tuple[str, Any]]) -> str:
    return " AND ".join(f"{c}={v}" for c, v in where)


class StatementBuilder:
    """Builds and executes the statement for each resolved row."""

    def __init__(
        self,
        session: Session,
        catalog: Catalog,
        template: ImportTemplate,
        context: ExecutionContext,
        table: str,
    ):
        self.session = session
        self.catalog = catalog
        self.template = template
        self.context = context
        self.table = table

    # ── INSERT ─────────────────────────────────────────────────────────

    def with_system_columns(self, columns: dict[str, Any]) -> dict[str, Any]:
        """Copy of ``columns`` with every missing system column filled in."""
        cols = dict(columns)
        ctx = self.context

        pk = f"{self.table}_ID"
        if _absent(cols, pk):
            next_id = self.catalog.next_primary_key(self.table)
            if next_id is None:
                raise SequenceExhaustionError(self.table)
            _put_if_absent(cols, pk, next_id)

        for name, template_default, ctx_default in (
            (CLIENT_COLUMN, self.template.client_id, ctx.client_id),
            (ORG_COLUMN, self.template.org_id, ctx.org_id),
        ):
            key = _key_in(cols, name)
            row_value = cols.get(key) if key else None
            _put_if_absent(cols, name,
                           first_non_zero(template_default, row_value, ctx_default))

        if self.catalog.table_has_column(self.table, ACTIVE_COLUMN):
            _put_if_absent(cols, ACTIVE_COLUMN, "Y")

        _put_if_absent(cols, "Created", ctx.now)
        _put_if_absent(cols, "CreatedBy", ctx.user_id)
        _put_if_absent(cols, "Updated", ctx.now)
        _put_if_absent(cols, "UpdatedBy", ctx.user_id)
        _put_if_absent(cols, UUID_COLUMN, str(uuid.uuid4()))
        return cols

    def insert(self, columns: dict[str, Any], row: int) -> RowOutcome:
        cols = self.with_system_columns(columns)
        result = self.session.execute(build_insert(self.table, cols))
        affected = result.rowcount if result.rowcount is not None else 0
        logger.debug("row %d: inserted %d into %s", row, affected, self.table)
        return RowOutcome(row=row, action=INSERT, affected=affected)

    # ── UPDATE ─────────────────────────────────────────────────────────

    def update(
        self,
        columns: dict[str, Any],
        field_specs: Sequence[FieldSpec],
        row: int,
    ) -> RowOutcome:
        key_specs = [fs for fs in field_specs if fs.is_key]

        if key_specs:
            where = [(fs.target_column, columns.get(fs.target_column))
                     for fs in key_specs]
            key_names = {fs.target_column for fs in key_specs}
            sets = {c: v for c, v in columns.items() if c not in key_names}
            first_key = key_specs[0]
            if any(v is None for _, v in where):
                raise RecordNotFoundError(
                    row=row, predicate=_predicate(where),
                    column=first_key.column_index, token=first_key.label,
                )
        else:
            # No /K column: bulk update over the client.
            client = first_non_zero(self.template.client_id, self.context.client_id)
            where = [(CLIENT_COLUMN, client)]
            sets = dict(columns)
            first_key = None

        if not sets:
            return RowOutcome(row=row, action=SKIP, detail="nothing to update")

        if self.catalog.table_has_column(self.table, "Updated"):
            _put_if_absent(sets, "Updated", self.context.now)
        if self.catalog.table_has_column(self.table, "UpdatedBy"):
            _put_if_absent(sets, "UpdatedBy", self.context.user_id)

        result = self.session.execute(build_update(self.table, sets, where))
        affected = result.rowcount if result.rowcount is not None else 0
        predicate = _predicate(where)

        if first_key is not None and affected == 0:
            raise RecordNotFoundError(
                row=row, predicate=predicate,
                column=first_key.column_index, token=first_key.label,
            )

        logger.debug("row %d: updated %d in %s where %s",
                     row, affected, self.table, predicate)
        return RowOutcome(row=row, action=UPDATE, affected=affected,
                          detail=predicate)
