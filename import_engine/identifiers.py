"""
import_engine.identifiers - Guard for table/column names built into SQL.

Table and column names come from header tokens and the dictionary, so
they are interpolated into statements; only plain identifiers pass.
"""

from __future__ import annotations

import re
from typing import Optional

from import_engine.errors import ConfigurationError
from import_engine.field_spec import FieldSpec

_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_identifier(name: Optional[str]) -> bool:
    return bool(name) and _IDENT.match(name) is not None


def checked(name: Optional[str], *, spec: Optional[FieldSpec] = None) -> str:
    if is_identifier(name):
        return name
    if spec is not None:
        raise ConfigurationError(
            f"Column {spec.column_index} ({spec.label}): "
            f"invalid identifier '{name}'",
            column=spec.column_index, token=spec.label, identifier=name,
        )
    raise ConfigurationError(f"Invalid identifier '{name}'", identifier=name)
