"""
import_engine.context - Who runs the import.

The ERP session supplies client, organization and user; the SQLAlchemy
Session passed alongside it is the transaction handle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

import config


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class ExecutionContext:
    client_id: int = 0
    org_id: int = 0
    user_id: int = 0
    # Audit timestamp stamped on every row of one run.
    now: datetime = field(default_factory=_now)

    @classmethod
    def from_config(cls, **overrides) -> "ExecutionContext":
        values = {
            "client_id": config.DEFAULT_CLIENT_ID,
            "org_id": config.DEFAULT_ORG_ID,
            "user_id": config.DEFAULT_USER_ID,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
