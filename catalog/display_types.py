"""
catalog.display_types - ERP display types mapped onto column kinds.

The dictionary stores a display type (AD_Reference_ID) per column.  The
import engine only ever switches over ColumnKind; anything catalog-specific
stays in this module.
"""

from __future__ import annotations

from enum import Enum


class ColumnKind(str, Enum):
    INTEGER  = "integer"
    DECIMAL  = "decimal"
    TEXT     = "text"
    BOOLEAN  = "boolean"
    TEMPORAL = "temporal"

    @property
    def is_numeric(self) -> bool:
        return self in (ColumnKind.INTEGER, ColumnKind.DECIMAL)


# ── AD_Reference_ID values ────────────────────────────────────────────
STRING      = 10
INTEGER     = 11
AMOUNT      = 12
ID          = 13
TEXT        = 14
DATE        = 15
DATETIME    = 16
LIST        = 17
TABLE       = 18
TABLEDIR    = 19
YESNO       = 20
LOCATION    = 21
NUMBER      = 22
BINARY      = 23
TIME        = 24
ACCOUNT     = 25
ROWID       = 26
COLOR       = 27
BUTTON      = 28
QUANTITY    = 29
SEARCH      = 30
LOCATOR     = 31
IMAGE       = 32
ASSIGNMENT  = 33
MEMO        = 34
PATTRIBUTE  = 35
TEXTLONG    = 36
COSTPRICE   = 37
FILEPATH    = 38
FILENAME    = 39
URL         = 40
PRINTERNAME = 42

_KIND_BY_DISPLAY_TYPE: dict[int, ColumnKind] = {
    # references to other records
    ID: ColumnKind.INTEGER,
    TABLE: ColumnKind.INTEGER,
    TABLEDIR: ColumnKind.INTEGER,
    SEARCH: ColumnKind.INTEGER,
    LOCATION: ColumnKind.INTEGER,
    LOCATOR: ColumnKind.INTEGER,
    ACCOUNT: ColumnKind.INTEGER,
    ASSIGNMENT: ColumnKind.INTEGER,
    PATTRIBUTE: ColumnKind.INTEGER,
    IMAGE: ColumnKind.INTEGER,
    INTEGER: ColumnKind.INTEGER,
    # amounts and quantities: Decimal, never float
    AMOUNT: ColumnKind.DECIMAL,
    NUMBER: ColumnKind.DECIMAL,
    COSTPRICE: ColumnKind.DECIMAL,
    QUANTITY: ColumnKind.DECIMAL,
    DATE: ColumnKind.TEMPORAL,
    DATETIME: ColumnKind.TEMPORAL,
    TIME: ColumnKind.TEMPORAL,
    YESNO: ColumnKind.BOOLEAN,
}


def kind_for(display_type: int | None) -> ColumnKind:
    """Map a display type to its ColumnKind; unknown types are text."""
    if display_type is None:
        return ColumnKind.TEXT
    return _KIND_BY_DISPLAY_TYPE.get(display_type, ColumnKind.TEXT)

