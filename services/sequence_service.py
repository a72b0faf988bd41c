"""
services.sequence_service - Primary-key allocation.

Isolated so both the import engine and anything else that creates
dictionary-managed records share the same AD_Sequence logic.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.models import ADSequence


def next_primary_key(session: Session, table: str) -> Optional[int]:
    """
    Return the next id for ``table`` and advance its table sequence.

    Returns None when no IsTableID sequence is registered for the table.
    The row is locked FOR UPDATE where the dialect supports it; the
    increment becomes visible when the caller commits.
    """
    stmt = (
        select(ADSequence)
        .where(func.upper(ADSequence.name) == table.upper())
        .where(ADSequence.is_table_id == "Y")
        .with_for_update()
    )
    seq = session.execute(stmt).scalars().first()
    if seq is None:
        return None

    nxt = seq.current_next
    seq.current_next = nxt + (seq.increment_no or 1)
    session.flush()
    return nxt
