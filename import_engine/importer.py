"""
import_engine.importer - Top-level orchestrator.

Coordinates field_spec → csv_parser → value_resolver → statement_builder
and produces a structured ImportReport.

``ImportFile`` is the core: it works inside the session it is given and
never commits or rolls back.  ``run_import`` wraps it with session
lifecycle and logging for the API and CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from catalog import Catalog
from db.engine import get_session
from db.models import ImportTemplate
from import_engine.context import ExecutionContext
from import_engine.csv_parser import RawRow, detect_separator, ingest, read_lines, split_line
from import_engine.errors import ConfigurationError, EmptySourceError, ImportEngineError
from import_engine.field_spec import FieldSpec, parse_header
from import_engine.report import INSERT, UPDATE, ImportReport
from import_engine.statement_builder import StatementBuilder
from import_engine.value_resolver import ValueResolver
from services.template_service import TemplateService

logger = logging.getLogger(__name__)

UPDATE_OPTION = "U"


def parse_mode(option: Optional[str]) -> str:
    """Map the process option to a mode: "U" (any case) is UPDATE, empty is INSERT."""
    if option is None or not option.strip():
        return INSERT
    if option.strip().upper() == UPDATE_OPTION:
        return UPDATE
    raise ConfigurationError(f"Unknown import mode '{option}'", mode=option)


class ImportFile:
    """One import run of a file through a template."""

    def __init__(
        self,
        session: Session,
        template: ImportTemplate,
        context: ExecutionContext,
        mode: str = INSERT,
    ):
        if template is None:
            raise ConfigurationError("No import template specified")
        if mode not in (INSERT, UPDATE):
            raise ConfigurationError(f"Unknown import mode '{mode}'", mode=mode)
        self.session = session
        self.template = template
        self.context = context
        self.mode = mode
        self.catalog = Catalog(session)

    def resolve_table(self) -> str:
        table = self.catalog.resolve_table_name(self.template.tab_id)
        if table is None:
            raise ConfigurationError(
                f"No table found for tab {self.template.tab_id}",
                tab_id=self.template.tab_id,
            )
        return table

    def run(self, path: str | Path) -> ImportReport:
        return self.run_lines(read_lines(path))

    def run_lines(self, lines: Sequence[str]) -> ImportReport:
        """Import already-read, non-blank lines."""
        table = self.resolve_table()
        if not lines:
            raise EmptySourceError("<no lines>")
        separator = detect_separator(lines[0])

        template_tokens = TemplateService.header_tokens(self.template)
        if template_tokens is not None:
            field_specs = parse_header(template_tokens)
            data_lines, first_row = list(lines), 1
        else:
            field_specs = parse_header(split_line(lines[0], separator))
            data_lines, first_row = list(lines[1:]), 2

        rows = ingest(data_lines, field_specs, separator, first_row)

        logger.info("Importing %d rows into %s (%s, template %s)",
                    len(rows), table, self.mode, self.template.id)

        report = ImportReport(table=table, mode=self.mode, total_rows=len(rows))
        resolver = ValueResolver(self.session, self.catalog, table)
        builder = StatementBuilder(self.session, self.catalog, self.template,
                                   self.context, table)

        for raw_row in rows:
            columns = self.resolve_row(resolver, field_specs, raw_row)
            if self.mode == UPDATE:
                outcome = builder.update(columns, field_specs, raw_row.row_number)
            else:
                outcome = builder.insert(columns, raw_row.row_number)
            report.add(outcome)

        logger.info("%s (%s)", report.summary(), table)
        return report

    @staticmethod
    def resolve_row(
        resolver: ValueResolver,
        field_specs: Sequence[FieldSpec],
        raw_row: RawRow,
    ) -> dict[str, Any]:
        """Target column → typed value, in header order."""
        columns: dict[str, Any] = {}
        for fs in field_specs:
            columns[fs.target_column] = resolver.resolve(
                fs, raw_row.cell(fs), raw_row.row_number,
            )
        return columns


def run_import(
    template_id: int,
    path: str | Path,
    *,
    mode: Optional[str] = None,
    context: Optional[ExecutionContext] = None,
    session: Optional[Session] = None,
) -> ImportReport:
    """
    Import a file through a stored template and commit.

    Parameters
    ----------
    template_id : AIT_ImportTemplate id
    path : file to read (UTF-8)
    mode : "U" for UPDATE, anything empty for INSERT
    context : client/org/user running the import (config defaults if None)
    session : existing session; one is opened (and closed) when omitted

    Any error rolls the whole run back and is re-raised.
    """
    own_session = session is None
    session = session or get_session()
    context = context or ExecutionContext.from_config()

    try:
        template = TemplateService.get(session, template_id)
        if template is None:
            raise ConfigurationError(
                f"Import template {template_id} not found",
                template_id=template_id,
            )
        report = ImportFile(session, template, context, parse_mode(mode)).run(path)
        session.commit()
        return report
    except ImportEngineError as exc:
        session.rollback()
        logger.error("Import of %s with template %s failed: %s", path, template_id, exc)
        raise
    except Exception:
        session.rollback()
        logger.exception("Import of %s with template %s failed", path, template_id)
        raise
    finally:
        if own_session:
            session.close()
