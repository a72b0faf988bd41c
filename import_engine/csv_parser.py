"""
import_engine.csv_parser - Low-level file reading and row validation.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG) and blank-line filtering
  • Separator detection (";" then TAB, else ",")
  • Splitting lines into trimmed cells, keeping empty fields
  • Row-shape and /K key-uniqueness validation over the whole file
    before anything is written
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import config
from import_engine.errors import (
    DuplicateKeyError,
    EmptySourceError,
    InvalidSourceError,
    MalformedRowError,
    RowError,
    SourceNotFoundError,
)
from import_engine.field_spec import FieldSpec


@dataclass(frozen=True)
class RawRow:
    """Trimmed cells of one data line, aligned to the header positions."""

    row_number: int
    cells: tuple[str, ...]

    def cell(self, spec: FieldSpec) -> Optional[str]:
        idx = spec.column_index - 1
        if idx < len(self.cells):
            return self.cells[idx]
        return None


def read_lines(path: str | Path) -> list[str]:
    """
    Read a text file and return its non-blank lines.

    Whitespace-only lines are dropped here, so every row number used in
    diagnostics is a position in the returned list.
    """
    p = Path(path)
    if not p.exists() or not p.is_file():
        raise SourceNotFoundError(p)

    try:
        lines = non_blank_lines(p.read_bytes())
    except UnicodeDecodeError as exc:
        raise InvalidSourceError(p, exc.start, exc.reason) from exc
    if not lines:
        raise EmptySourceError(p)
    return lines


def non_blank_lines(raw: str | bytes) -> list[str]:
    text = _decode(raw)
    return [line for line in text.splitlines() if line.strip()]


def detect_separator(line: str) -> str:
    if ";" in line:
        return ";"
    if "\t" in line:
        return "\t"
    return ","


def split_line(line: str, separator: str) -> list[str]:
    """Split keeping every field, including empty leading/trailing ones."""
    return [cell.strip() for cell in line.split(separator)]


def ingest(
    lines: Sequence[str],
    field_specs: Sequence[FieldSpec],
    separator: str,
    first_row_number: int = 1,
) -> list[RawRow]:
    """
    Split data lines into RawRows and validate the whole file.

    ``first_row_number`` is the position of ``lines[0]`` in the non-blank
    file (2 when the file carried its own header line).  The pass runs to
    the end; the first problem found is raised with all of them attached
    as ``problems``.
    """
    expected = len(field_specs)
    key_specs = [fs for fs in field_specs if fs.is_key]
    key_value_first_row: dict[int, dict[str, int]] = {
        fs.column_index: {} for fs in key_specs
    }

    rows: list[RawRow] = []
    problems: list[RowError] = []

    for offset, line in enumerate(lines):
        row_number = first_row_number + offset
        cells = split_line(line, separator)
        if len(cells) < expected:
            problems.append(MalformedRowError(
                row=row_number, expected=expected, found=len(cells), line=line,
            ))
            continue

        # Extra trailing cells are ignored.
        row = RawRow(row_number=row_number, cells=tuple(cells[:expected]))

        for fs in key_specs:
            value = row.cell(fs) or ""
            seen = key_value_first_row[fs.column_index]
            if value in seen:
                problems.append(DuplicateKeyError(
                    row=row_number, column=fs.column_index, token=fs.label,
                    value=value, first_row=seen[value],
                ))
            else:
                seen[value] = row_number

        rows.append(row)

    if problems:
        first = problems[0]
        first.problems = problems
        raise first
    return rows


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode(config.FILE_ENCODING)
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw
