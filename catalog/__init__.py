"""
catalog - Dictionary metadata used by the import engine.

Public API:
    Catalog(session)      → table/column metadata and primary keys
    ColumnKind            → closed set of column kinds
    ColumnConstraints     → per-column limits (max_length)
    display_types.kind_for(display_type)
"""

from catalog.catalog import Catalog, ColumnConstraints         # noqa: F401
from catalog.display_types import ColumnKind, kind_for          # noqa: F401
