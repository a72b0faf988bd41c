"""
import_engine - Template-driven file import pipeline.

Public API:
    run_import(template_id, path, mode=None, context=None) → ImportReport
    ImportFile(session, template, context, mode).run(path)
    FieldSpec.parse(token, position) / parse_header(tokens)
    ExecutionContext, ImportReport, errors.*
"""

from import_engine.context import ExecutionContext                  # noqa: F401
from import_engine.errors import ImportEngineError                  # noqa: F401
from import_engine.field_spec import FieldSpec, parse_header         # noqa: F401
from import_engine.importer import ImportFile, parse_mode, run_import  # noqa: F401
from import_engine.report import ImportReport, RowOutcome            # noqa: F401
