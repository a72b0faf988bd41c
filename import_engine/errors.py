"""
import_engine.errors - Error taxonomy for an import run.

Every error is fatal to the run.  Each one keeps its coordinates as
attributes (row, column, token, value …) so callers can program against
the kind instead of parsing the message; ``to_dict()`` feeds the API.
"""

from __future__ import annotations

from typing import Any, Optional


class ImportEngineError(Exception):
    """Base class for everything the import engine raises."""

    kind = "import_error"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        out = {"kind": self.kind, "message": self.message}
        for key, val in self.details.items():
            out[key] = val if isinstance(val, (int, str, type(None))) else str(val)
        return out


class ConfigurationError(ImportEngineError):
    """Missing/invalid template, tab without table, bad identifier or mode."""

    kind = "configuration"


class SourceNotFoundError(ImportEngineError):
    kind = "source_not_found"

    def __init__(self, path):
        super().__init__(f"File not found: {path}", path=str(path))
        self.path = path


class EmptySourceError(ImportEngineError):
    kind = "empty_source"

    def __init__(self, path):
        super().__init__(f"File is empty: {path}", path=str(path))
        self.path = path


class InvalidSourceError(ImportEngineError):
    """The file is not valid text in the configured encoding."""

    kind = "invalid_source"

    def __init__(self, path, offset: int, reason: str):
        super().__init__(f"File {path} is not valid text at byte {offset}: {reason}",
                         path=str(path), offset=offset)
        self.path = path
        self.offset = offset


class SequenceExhaustionError(ImportEngineError):
    """No primary-key sequence is registered for the table."""

    kind = "sequence"

    def __init__(self, table: str):
        super().__init__(f"No table sequence found for {table}", table=table)
        self.table = table


# ── Row-scoped errors ─────────────────────────────────────────────────

class RowError(ImportEngineError):
    """
    Raised when a row cannot be imported.

    ``row`` is the 1-based position in the non-blank line sequence,
    ``column`` the 1-based header position and ``token`` the header
    token text as written.
    """

    kind = "row"

    def __init__(
        self,
        reason: str,
        *,
        row: int,
        column: Optional[int] = None,
        token: Optional[str] = None,
        cause: Optional[BaseException] = None,
        **details: Any,
    ):
        if column is not None:
            prefix = f"Row {row}, column {column} ({token})"
        else:
            prefix = f"Row {row}"
        super().__init__(f"{prefix}: {reason}", row=row, column=column,
                         token=token, **details)
        self.reason = reason
        self.row = row
        self.column = column
        self.token = token
        self.cause = cause
        # Validation passes attach every conflict they found here.
        self.problems: list[RowError] = [self]

    def to_dict(self) -> dict:
        out = super().to_dict()
        if self.cause is not None:
            out["cause"] = str(self.cause)
        if len(self.problems) > 1:
            out["problems"] = [p.message for p in self.problems]
        return out


class MalformedRowError(RowError):
    kind = "malformed_row"

    def __init__(self, *, row: int, expected: int, found: int, line: str):
        super().__init__(
            f"incomplete. Expected: {expected}, found: {found} -> Line: {line}",
            row=row, expected=expected, found=found, line=line,
        )
        self.expected = expected
        self.found = found
        self.line = line


class DuplicateKeyError(RowError):
    kind = "duplicate_key"

    def __init__(self, *, row: int, column: int, token: str, value: str,
                 first_row: int):
        super().__init__(
            f"repeated key value '{value}', already present in row {first_row}",
            row=row, column=column, token=token, value=value,
            first_row=first_row,
        )
        self.value = value
        self.first_row = first_row


class LookupNotFoundError(RowError):
    kind = "lookup_not_found"

    def __init__(self, *, row: int, column: int, token: str, value: str,
                 table: str, lookup_column: str):
        super().__init__(
            f"value '{value}' not found in {table}.{lookup_column}",
            row=row, column=column, token=token, value=value,
            table=table, lookup_column=lookup_column,
        )
        self.value = value
        self.table = table
        self.lookup_column = lookup_column


class LookupAmbiguousError(RowError):
    kind = "lookup_ambiguous"

    def __init__(self, *, row: int, column: int, token: str, value: str,
                 table: str, lookup_column: str, matches: int):
        super().__init__(
            f"ambiguous value, {matches} records in {table} "
            f"for {lookup_column}={value}",
            row=row, column=column, token=token, value=value,
            table=table, lookup_column=lookup_column, matches=matches,
        )
        self.value = value
        self.table = table
        self.lookup_column = lookup_column
        self.matches = matches


class TypeCastError(RowError):
    kind = "type_cast"

    def __init__(self, reason: str, *, row: int, column: int, token: str,
                 value: str, cause: Optional[BaseException] = None):
        super().__init__(reason, row=row, column=column, token=token,
                         cause=cause, value=value)
        self.value = value


class RecordNotFoundError(RowError):
    kind = "record_not_found"

    def __init__(self, *, row: int, predicate: str,
                 column: Optional[int] = None, token: Optional[str] = None):
        super().__init__(
            f"UPDATE found no record with {predicate}",
            row=row, column=column, token=token, predicate=predicate,
        )
        self.predicate = predicate
