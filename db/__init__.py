"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    get_engine()    → the bound Engine
    ORM models      → dictionary tables and ImportTemplate
"""

from db.engine import init_db, get_session, get_engine         # noqa: F401
from db.models import (                                          # noqa: F401
    Base, ADTable, ADTab, ADColumn, ADSequence, ImportTemplate,
)
