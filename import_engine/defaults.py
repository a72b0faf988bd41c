"""
import_engine.defaults - Precedence helpers for system column values.

Candidates are given in priority order; the first usable one wins.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

T = TypeVar("T")


def as_int(value: Any) -> int:
    """Best-effort integer; anything unparsable counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def first_non_zero(*candidates: Any) -> int:
    """First candidate that is a positive integer, else 0."""
    for c in candidates:
        v = as_int(c)
        if v > 0:
            return v
    return 0


def first_non_null(*candidates: Optional[T]) -> Optional[T]:
    for c in candidates:
        if c is not None:
            return c
    return None
